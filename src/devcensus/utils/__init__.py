from .normalization import normalize_city, split_tags

__all__ = ["normalize_city", "split_tags"]
