from .base import BotRuntime
from .polling import PollingRuntime
from .webhook import WebhookRuntime

__all__ = ["BotRuntime", "WebhookRuntime", "PollingRuntime"]
