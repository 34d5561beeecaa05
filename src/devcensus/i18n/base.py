"""Base dataclasses and abstract Locale for type-safe i18n"""

from abc import ABC
from dataclasses import dataclass


# Nested dataclasses for logical grouping
@dataclass
class CommandsStart:
    GREETING: str
    ALREADY_REGISTERED: str


@dataclass
class CommandsProfile:
    NOT_FOUND: str


@dataclass
class CommandsStats:
    SUMMARY: str  # Template with {count} and {average}


@dataclass
class CommandsCancel:
    CANCELLED: str
    NOTHING_TO_CANCEL: str


@dataclass
class CommandDescriptions:
    START: str
    PROFILE: str
    UPDATE: str
    SEARCH: str
    STATS: str
    CANCEL: str


@dataclass
class Commands:
    start: CommandsStart
    profile: CommandsProfile
    stats: CommandsStats
    cancel: CommandsCancel
    descriptions: CommandDescriptions
    HINT: str  # Reply to plain text outside of any flow


@dataclass
class RegistrationErrors:
    AGE_INVALID: str
    CITY_EMPTY: str
    TAGS_EMPTY: str
    EXPERIENCE_INVALID: str
    SALARY_INVALID: str


@dataclass
class Registration:
    FIRST_NAME: str
    LAST_NAME: str
    AGE: str
    CITY_CHOOSE: str  # Shown together with the top-cities keyboard
    CITY_FREE: str
    STACK: str
    EXPERIENCE: str
    SALARY: str
    COMPANY: str
    INTERESTS: str
    COMPLETED: str
    errors: RegistrationErrors


@dataclass
class Search:
    CITY_CHOOSE: str
    CITY_FREE: str
    CITY_REQUIRED: str
    NOT_FOUND: str  # Template with {city}
    RESULT_LINE: str  # Template with {user} and {city}
    FAILED: str


@dataclass
class Profile:
    CARD: str  # Template, see EnglishLocale
    EXPERIENCE: str  # Template with {years} and {months}
    PLACEHOLDER: str
    LIST_SEPARATOR: str


@dataclass
class SystemErrors:
    TEXT_REQUIRED: str
    NO_SENDER: str
    STORE_UNAVAILABLE: str
    SOMETHING_WENT_WRONG: str


@dataclass
class System:
    errors: SystemErrors


# Abstract base class
class Locale(ABC):
    """Abstract base for all locales"""

    language: str
    commands: Commands
    registration: Registration
    search: Search
    profile: Profile
    system: System
