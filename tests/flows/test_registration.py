"""Tests for the registration flow: field validators, skip semantics and commit."""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from devcensus.db import upsert_user
from devcensus.flows import (
    REGISTRATION_FLOW,
    SKIP_TOKEN,
    FlowCompleted,
    Proceed,
    RegistrationDraft,
    Retry,
    StepEngine,
    StepPrompted,
    StepRetried,
)
from devcensus.flows.errors import StepValidationError
from devcensus.flows.registration import save_registration
from devcensus.flows.steps import (
    bounded_int,
    city_parser,
    field_step,
    static_prompt,
    tags_parser,
)
from devcensus.i18n import L

from ..db_helpers import get_user

TG_ID = 7001

FULL_ANSWERS = [
    "Alice",
    "Smith",
    "30",
    " Paris ",
    "python, go ,",
    "24",
    "5000",
    "Acme",
    "chess, hiking",
]


# Parsers


def test_bounded_int() -> None:
    parse = bounded_int("bad", maximum=150)

    assert parse(" 42 ") == 42
    assert parse("0") == 0
    assert parse("150") == 150
    for text in ["-1", "151", "abc", "4.5", ""]:
        with pytest.raises(StepValidationError) as exc_info:
            parse(text)
        assert exc_info.value.user_message == "bad"


def test_city_parser_normalizes() -> None:
    parse = city_parser("empty")

    assert parse("  New York ") == "new york"
    with pytest.raises(StepValidationError):
        parse("   ")


def test_tags_parser_drops_blank_items() -> None:
    parse = tags_parser("empty")

    assert parse(" python , go,, ") == ["python", "go"]
    with pytest.raises(StepValidationError):
        parse(" , ,")


# Field steps


def test_field_step_outcomes() -> None:
    step = field_step("age", static_prompt("Age?"), bounded_int("bad"))
    draft = RegistrationDraft(telegram_id=TG_ID)

    assert step.handle(SKIP_TOKEN, draft) == Proceed()
    assert draft.age is None

    assert step.handle("abc", draft) == Retry("bad")
    assert draft.age is None

    assert step.handle(None, draft) == Retry(L.system.errors.TEXT_REQUIRED)

    assert step.handle("33", draft) == Proceed()
    assert draft.age == 33


def test_draft_profile_fields_omit_unset_values() -> None:
    draft = RegistrationDraft(telegram_id=TG_ID, username="alice", age=0)

    assert draft.profile_fields() == {"username": "alice", "age": 0}


def test_registration_flow_field_order() -> None:
    assert [step.field for step in REGISTRATION_FLOW.steps] == [
        "first_name",
        "last_name",
        "age",
        "city",
        "stack",
        "experience_months",
        "salary",
        "company",
        "interests",
    ]


# Whole flow


async def _run(
    engine: StepEngine, session: AsyncSession, answers: list[str]
) -> list[object]:
    return [await engine.advance(session, TG_ID, text) for text in answers]


async def test_full_registration_commits_normalized_profile(
    db_session: AsyncSession,
) -> None:
    engine = StepEngine()
    engine.enter(
        TG_ID, REGISTRATION_FLOW, RegistrationDraft(telegram_id=TG_ID, username="alice")
    )

    results = await _run(engine, db_session, FULL_ANSWERS)

    assert all(isinstance(r, StepPrompted) for r in results[:-1])
    final = results[-1]
    assert isinstance(final, FlowCompleted)
    assert final.reply.text == L.registration.COMPLETED
    assert final.reply.remove_keyboard

    user = await get_user(db_session, TG_ID)
    assert user.username == "alice"
    assert user.first_name == "Alice"
    assert user.last_name == "Smith"
    assert user.age == 30
    assert user.city == "paris"
    assert user.stack == ["python", "go"]
    assert user.experience_months == 24
    assert user.salary == 5000
    assert user.company == "Acme"
    assert user.interests == ["chess", "hiking"]
    assert user.last_experience_update is not None
    assert engine.current_step(TG_ID) is None


async def test_invalid_age_retries_without_advancing(
    db_session: AsyncSession,
) -> None:
    engine = StepEngine()
    draft = RegistrationDraft(telegram_id=TG_ID)
    engine.enter(TG_ID, REGISTRATION_FLOW, draft)
    await _run(engine, db_session, ["Alice", "Smith"])

    for bad in ["abc", "151", "-3"]:
        result = await engine.advance(db_session, TG_ID, bad)
        assert isinstance(result, StepRetried)
        assert result.step_index == 2
        assert result.reply.text == (
            f"{L.registration.errors.AGE_INVALID}\n\n{L.registration.AGE}"
        )
        assert draft.age is None

    result = await engine.advance(db_session, TG_ID, "30")
    assert isinstance(result, StepPrompted)
    assert draft.age == 30


async def test_city_step_offers_top_cities(db_session: AsyncSession) -> None:
    await upsert_user(db_session, 1, {"city": "rome"})
    await upsert_user(db_session, 2, {"city": "oslo"})
    await upsert_user(db_session, 3, {"city": "oslo"})

    engine = StepEngine()
    engine.enter(TG_ID, REGISTRATION_FLOW, RegistrationDraft(telegram_id=TG_ID))
    *_, city_prompt = await _run(engine, db_session, ["Alice", "Smith", "30"])

    assert isinstance(city_prompt, StepPrompted)
    assert city_prompt.reply.text == L.registration.CITY_CHOOSE
    assert city_prompt.reply.options == ["oslo", "rome"]

    stack_prompt = await engine.advance(db_session, TG_ID, "Rome")
    assert isinstance(stack_prompt, StepPrompted)
    assert stack_prompt.reply.remove_keyboard


async def test_city_step_without_suggestions_asks_free_text(
    db_session: AsyncSession,
) -> None:
    engine = StepEngine()
    engine.enter(TG_ID, REGISTRATION_FLOW, RegistrationDraft(telegram_id=TG_ID))
    *_, city_prompt = await _run(engine, db_session, ["Alice", "Smith", "30"])

    assert isinstance(city_prompt, StepPrompted)
    assert city_prompt.reply.text == L.registration.CITY_FREE
    assert city_prompt.reply.options is None


async def test_skip_everything_keeps_stored_values(
    db_session: AsyncSession,
) -> None:
    await upsert_user(
        db_session,
        TG_ID,
        {"first_name": "Alice", "salary": 1000, "city": "paris"},
    )

    engine = StepEngine()
    engine.enter(
        TG_ID, REGISTRATION_FLOW, RegistrationDraft(telegram_id=TG_ID, username="al")
    )
    results = await _run(engine, db_session, [SKIP_TOKEN] * len(REGISTRATION_FLOW.steps))

    assert isinstance(results[-1], FlowCompleted)
    db_session.expunge_all()
    user = await get_user(db_session, TG_ID)
    assert user.username == "al"
    assert user.first_name == "Alice"
    assert user.salary == 1000
    assert user.city == "paris"
    assert user.last_experience_update is not None


async def test_save_registration_reports_store_failure(
    db_session: AsyncSession,
) -> None:
    failure = OperationalError("UPDATE users", {}, Exception("db down"))
    with patch(
        "devcensus.flows.registration.upsert_user",
        AsyncMock(side_effect=failure),
    ):
        reply = await save_registration(
            db_session, RegistrationDraft(telegram_id=TG_ID, first_name="A")
        )

    assert reply.text == L.system.errors.STORE_UNAVAILABLE
    assert reply.remove_keyboard
