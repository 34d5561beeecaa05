"""Tests for the StepEngine state machine, using a small two-step flow."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from devcensus.flows import (
    Abort,
    Flow,
    FlowAborted,
    FlowCompleted,
    NoActiveFlow,
    Proceed,
    Retry,
    Step,
    StepEngine,
    StepPrompted,
    StepRetried,
)
from devcensus.flows.results import StepOutcome
from devcensus.flows.steps import static_prompt
from devcensus.types import Reply


@dataclass
class NoteDraft:
    title: str | None = None
    body: str | None = None
    committed: list[str] = field(default_factory=list)


def _title(text: str | None, draft: NoteDraft) -> StepOutcome:
    if text == "quit":
        return Abort("bye")
    if not text:
        return Retry("title please")
    draft.title = text
    return Proceed()


def _body(text: str | None, draft: NoteDraft) -> StepOutcome:
    draft.body = text
    return Proceed()


async def _commit(session: AsyncSession, draft: NoteDraft) -> Reply:
    draft.committed.append(f"{draft.title}:{draft.body}")
    return Reply(text="saved", remove_keyboard=True)


NOTE_FLOW: Flow[NoteDraft] = Flow(
    name="note",
    steps=(
        Step(field="title", prompt=static_prompt("Title?"), handle=_title),
        Step(field="body", prompt=static_prompt("Body?"), handle=_body),
    ),
    commit=_commit,
)

CHAT = 100


@pytest.fixture
def session() -> AsyncSession:
    return MagicMock(spec=AsyncSession)


def test_flow_without_steps_is_rejected() -> None:
    with pytest.raises(ValueError, match="no steps"):
        Flow(name="empty", steps=(), commit=_commit)


async def test_enter_and_prompt_first_step(session: AsyncSession) -> None:
    engine = StepEngine()
    engine.enter(CHAT, NOTE_FLOW, NoteDraft())

    assert engine.current_step(CHAT) == 0
    assert (await engine.prompt(session, CHAT)).text == "Title?"


async def test_prompt_without_flow_raises(session: AsyncSession) -> None:
    with pytest.raises(LookupError):
        await StepEngine().prompt(session, CHAT)


async def test_advance_without_flow(session: AsyncSession) -> None:
    result = await StepEngine().advance(session, CHAT, "hello")
    assert isinstance(result, NoActiveFlow)


async def test_full_run_commits_and_releases(session: AsyncSession) -> None:
    engine = StepEngine()
    draft = NoteDraft()
    engine.enter(CHAT, NOTE_FLOW, draft)

    first = await engine.advance(session, CHAT, "groceries")
    assert isinstance(first, StepPrompted)
    assert first.step_index == 1
    assert first.reply.text == "Body?"

    second = await engine.advance(session, CHAT, "milk")
    assert isinstance(second, FlowCompleted)
    assert second.reply.text == "saved"
    assert draft.committed == ["groceries:milk"]

    assert engine.current_step(CHAT) is None
    assert isinstance(await engine.advance(session, CHAT, "again"), NoActiveFlow)


async def test_retry_keeps_step_and_repeats_prompt(session: AsyncSession) -> None:
    engine = StepEngine()
    draft = NoteDraft()
    engine.enter(CHAT, NOTE_FLOW, draft)

    result = await engine.advance(session, CHAT, "")

    assert isinstance(result, StepRetried)
    assert result.step_index == 0
    assert result.reply.text == "title please\n\nTitle?"
    assert engine.current_step(CHAT) == 0
    assert draft.title is None


async def test_abort_discards_draft(session: AsyncSession) -> None:
    engine = StepEngine()
    draft = NoteDraft()
    engine.enter(CHAT, NOTE_FLOW, draft)

    result = await engine.advance(session, CHAT, "quit")

    assert isinstance(result, FlowAborted)
    assert result.reply.text == "bye"
    assert result.reply.remove_keyboard
    assert engine.current_step(CHAT) is None
    assert draft.committed == []


async def test_last_enter_wins(session: AsyncSession) -> None:
    engine = StepEngine()
    old = NoteDraft()
    new = NoteDraft()
    engine.enter(CHAT, NOTE_FLOW, old)
    await engine.advance(session, CHAT, "old title")

    engine.enter(CHAT, NOTE_FLOW, new)
    assert engine.current_step(CHAT) == 0

    await engine.advance(session, CHAT, "new title")
    await engine.advance(session, CHAT, "body")

    assert new.committed == ["new title:body"]
    assert old.committed == []


async def test_conversations_are_independent(session: AsyncSession) -> None:
    engine = StepEngine()
    engine.enter(1, NOTE_FLOW, NoteDraft())
    engine.enter(2, NOTE_FLOW, NoteDraft())

    await engine.advance(session, 1, "title")

    assert engine.current_step(1) == 1
    assert engine.current_step(2) == 0


def test_exit() -> None:
    engine = StepEngine()
    engine.enter(CHAT, NOTE_FLOW, NoteDraft())

    assert engine.exit(CHAT) is True
    assert engine.exit(CHAT) is False
    assert engine.current_step(CHAT) is None


async def test_expired_draft_is_dropped_on_access(session: AsyncSession) -> None:
    engine = StepEngine(draft_ttl=timedelta(minutes=10))
    active = engine.enter(CHAT, NOTE_FLOW, NoteDraft())
    start = active.touched_at

    result = await engine.advance(session, CHAT, "title", now=start + timedelta(minutes=5))
    assert isinstance(result, StepPrompted)

    late = start + timedelta(minutes=16)
    result = await engine.advance(session, CHAT, "body", now=late)
    assert isinstance(result, NoActiveFlow)


def test_evict_expired() -> None:
    engine = StepEngine(draft_ttl=timedelta(minutes=10))
    stale = engine.enter(1, NOTE_FLOW, NoteDraft())
    fresh = engine.enter(2, NOTE_FLOW, NoteDraft())
    now = datetime.now(UTC)
    stale.touched_at = now - timedelta(hours=1)
    fresh.touched_at = now

    assert engine.evict_expired(now) == 1
    assert engine.get(1, now) is None
    assert engine.get(2, now) is fresh


def test_evict_without_ttl_keeps_everything() -> None:
    engine = StepEngine()
    active = engine.enter(CHAT, NOTE_FLOW, NoteDraft())
    active.touched_at = datetime(2000, 1, 1, tzinfo=UTC)

    assert engine.evict_expired() == 0
    assert engine.current_step(CHAT) == 0


async def test_unknown_outcome_is_a_type_error(session: AsyncSession) -> None:
    flow: Flow[NoteDraft] = Flow(
        name="broken",
        steps=(
            Step(
                field="title",
                prompt=static_prompt("?"),
                handle=lambda text, draft: "nope",  # type: ignore[arg-type,return-value]
            ),
        ),
        commit=_commit,
    )
    engine = StepEngine()
    engine.enter(CHAT, flow, NoteDraft())

    with pytest.raises(TypeError):
        await engine.advance(session, CHAT, "x")
