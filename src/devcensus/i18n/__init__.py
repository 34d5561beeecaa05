"""Type-safe locale strings for the devcensus bot"""

from functools import lru_cache

from .base import Locale
from .en import EnglishLocale


@lru_cache(maxsize=1)
def get_locale() -> Locale:
    return EnglishLocale()


# Singleton instance - short name for convenience
L = get_locale()

__all__ = ["Locale", "EnglishLocale", "get_locale", "L"]
