from .replies import Reply

__all__ = ["Reply"]
