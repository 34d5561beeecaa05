"""User-visible rendering of stored profiles."""

from ..i18n import L
from ..models import User


def format_user_label(user: User) -> str:
    return f"@{user.username}" if user.username else f"#{user.telegram_id}"


def _or_placeholder(value: object) -> str:
    if value is None:
        return L.profile.PLACEHOLDER
    if isinstance(value, list):
        return L.profile.LIST_SEPARATOR.join(value) or L.profile.PLACEHOLDER
    return str(value)


def format_profile_card(user: User) -> str:
    experience = (
        L.profile.EXPERIENCE.format(
            years=user.experience_years, months=user.experience_months
        )
        if user.experience_months is not None
        else None
    )
    return L.profile.CARD.format(
        handle=format_user_label(user),
        first_name=_or_placeholder(user.first_name),
        last_name=_or_placeholder(user.last_name),
        age=_or_placeholder(user.age),
        city=_or_placeholder(user.city),
        stack=_or_placeholder(user.stack),
        experience=_or_placeholder(experience),
        salary=_or_placeholder(user.salary),
        company=_or_placeholder(user.company),
        interests=_or_placeholder(user.interests),
    )
