"""English locale implementation"""

from dataclasses import dataclass

from .base import (
    CommandDescriptions,
    Commands,
    CommandsCancel,
    CommandsProfile,
    CommandsStart,
    CommandsStats,
    Locale,
    Profile,
    Registration,
    RegistrationErrors,
    Search,
    System,
    SystemErrors,
)


@dataclass
class EnglishLocale(Locale):
    language = "en"
    commands = Commands(
        start=CommandsStart(
            GREETING="Welcome! Let's get you registered.",
            ALREADY_REGISTERED="You're already registered! Use /profile to view your data or /update to change it.",
        ),
        profile=CommandsProfile(
            NOT_FOUND="User not found or not registered.",
        ),
        stats=CommandsStats(
            SUMMARY="Total users: {count}\nAverage salary: {average}",
        ),
        cancel=CommandsCancel(
            CANCELLED="Cancelled. Nothing was saved.",
            NOTHING_TO_CANCEL="There's nothing to cancel.",
        ),
        descriptions=CommandDescriptions(
            START="Register",
            PROFILE="View a profile (@username for someone else's)",
            UPDATE="Update your data",
            SEARCH="Find users by city",
            STATS="Average salary",
            CANCEL="Cancel the current form",
        ),
        HINT="Use /start to register, /profile to view a profile, /search to find people by city or /stats for statistics.",
    )
    registration = Registration(
        FIRST_NAME="Enter your first name (or /skip):",
        LAST_NAME="Enter your last name (or /skip):",
        AGE="How old are you? (or /skip):",
        CITY_CHOOSE="Pick a city from the list or type your own (or /skip):",
        CITY_FREE="Which city do you live in? (or /skip):",
        STACK="What's your tech stack? (comma-separated, or /skip):",
        EXPERIENCE="How much work experience do you have, in months? (or /skip):",
        SALARY="What's your salary? (or /skip):",
        COMPANY="Which company do you work for? (or /skip):",
        INTERESTS="What are your interests? (comma-separated, or /skip):",
        COMPLETED="Registration complete! Use /profile to view your data.",
        errors=RegistrationErrors(
            AGE_INVALID="Please enter a valid age (a number from 0 to 150).",
            CITY_EMPTY="Please enter a city name.",
            TAGS_EMPTY="Please enter at least one item, separated by commas.",
            EXPERIENCE_INVALID="Please enter a valid experience (a whole number of months).",
            SALARY_INVALID="Please enter a valid salary (a non-negative number).",
        ),
    )
    search = Search(
        CITY_CHOOSE="Pick a city to search or type your own:",
        CITY_FREE="Enter a city to search:",
        CITY_REQUIRED="Please enter a city name.",
        NOT_FOUND='No users found in "{city}".',
        RESULT_LINE="{user}: {city}",
        FAILED="Search failed. Please try again later.",
    )
    profile = Profile(
        CARD=(
            "Profile {handle}:\n"
            "First name: {first_name}\n"
            "Last name: {last_name}\n"
            "Age: {age}\n"
            "City: {city}\n"
            "Stack: {stack}\n"
            "Experience: {experience}\n"
            "Salary: {salary}\n"
            "Company: {company}\n"
            "Interests: {interests}"
        ),
        EXPERIENCE="{years} years ({months} mo.)",
        PLACEHOLDER="-",
        LIST_SEPARATOR=", ",
    )
    system = System(
        errors=SystemErrors(
            TEXT_REQUIRED="Please answer with a text message.",
            NO_SENDER="I can only talk to users in private chats.",
            STORE_UNAVAILABLE="Couldn't save your data right now. Please try again later.",
            SOMETHING_WENT_WRONG="Something went wrong. Please try again later.",
        )
    )
