"""Text normalization shared by the profile store and the flows."""


def normalize_city(text: str) -> str:
    return text.strip().lower()


def split_tags(text: str) -> list[str]:
    """Split comma-separated input into trimmed, non-empty items (order kept)."""
    return [item.strip() for item in text.split(",") if item.strip()]
