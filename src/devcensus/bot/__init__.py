from .core import create_bot, create_dispatcher, initialize_bot
from .handlers import router, step_engine

__all__ = [
    "create_bot",
    "create_dispatcher",
    "initialize_bot",
    "router",
    "step_engine",
]
