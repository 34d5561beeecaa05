"""Step engine: drives fixed sequences of conversational steps.

A flow is an ordered tuple of steps plus a commit callback. Each conversation
has at most one live flow; its draft and step index are the whole "waiting"
state between two inbound messages, so nothing blocks inside a step:

1. ``enter`` binds a fresh draft at step 0 (replacing any previous flow)
2. ``prompt`` renders the current step's question
3. ``advance`` feeds one inbound message to the current step's handler
4. after the last step the draft goes to the flow's commit callback and is
   released

Drafts live in process memory only. An optional TTL drops drafts that have
been idle for too long.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ..types import Reply
from .results import (
    Abort,
    FlowAborted,
    FlowCompleted,
    NoActiveFlow,
    Proceed,
    Retry,
    StepOutcome,
    StepPrompted,
    StepResult,
    StepRetried,
)

logger = logging.getLogger(__name__)

type PromptFn = Callable[[AsyncSession], Awaitable[Reply]]
type StepHandler[DraftT] = Callable[[str | None, DraftT], StepOutcome]
type CommitFn[DraftT] = Callable[[AsyncSession, DraftT], Awaitable[Reply]]


def _now() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class Step[DraftT]:
    field: str
    prompt: PromptFn
    handle: StepHandler[DraftT]


@dataclass(frozen=True)
class Flow[DraftT]:
    name: str
    steps: tuple[Step[DraftT], ...]
    commit: CommitFn[DraftT]

    def __post_init__(self) -> None:
        if not self.steps:
            raise ValueError(f"Flow {self.name!r} has no steps")


@dataclass
class ActiveFlow[DraftT]:
    """Handle to one conversation's live draft."""

    flow: Flow[DraftT]
    draft: DraftT
    step_index: int = 0
    touched_at: datetime = field(default_factory=_now)

    @property
    def step(self) -> Step[DraftT]:
        return self.flow.steps[self.step_index]


class StepEngine:
    def __init__(self, draft_ttl: timedelta | None = None) -> None:
        self.draft_ttl = draft_ttl
        self._active: dict[int, ActiveFlow[Any]] = {}

    def enter[DraftT](
        self, conversation_id: int, flow: Flow[DraftT], draft: DraftT
    ) -> ActiveFlow[DraftT]:
        """Start ``flow`` at step 0; a previously active flow is discarded."""
        previous = self._active.pop(conversation_id, None)
        if previous is not None:
            logger.info(
                "Conversation %d left flow %s at step %d to enter %s",
                conversation_id,
                previous.flow.name,
                previous.step_index,
                flow.name,
            )

        active = ActiveFlow(flow=flow, draft=draft)
        self._active[conversation_id] = active
        logger.debug("Conversation %d entered flow %s", conversation_id, flow.name)
        return active

    def get(
        self, conversation_id: int, now: datetime | None = None
    ) -> ActiveFlow[Any] | None:
        """Live flow for the conversation; expired drafts are dropped here."""
        active = self._active.get(conversation_id)
        if active is None:
            return None
        if self._is_expired(active, now or _now()):
            logger.info(
                "Conversation %d draft for flow %s expired at step %d",
                conversation_id,
                active.flow.name,
                active.step_index,
            )
            self._release(conversation_id, active)
            return None
        return active

    def current_step(self, conversation_id: int) -> int | None:
        active = self.get(conversation_id)
        return None if active is None else active.step_index

    def exit(self, conversation_id: int) -> bool:
        """Abandon the conversation's flow. Returns False if none was active."""
        active = self.get(conversation_id)
        if active is None:
            return False
        self._release(conversation_id, active)
        logger.info(
            "Conversation %d exited flow %s at step %d",
            conversation_id,
            active.flow.name,
            active.step_index,
        )
        return True

    async def prompt(self, session: AsyncSession, conversation_id: int) -> Reply:
        active = self.get(conversation_id)
        if active is None:
            raise LookupError(f"Conversation {conversation_id} has no active flow")
        return await active.step.prompt(session)

    async def advance(
        self,
        session: AsyncSession,
        conversation_id: int,
        text: str | None,
        now: datetime | None = None,
    ) -> StepResult:
        now = now or _now()
        active = self.get(conversation_id, now)
        if active is None:
            return NoActiveFlow()

        active.touched_at = now
        step = active.step
        outcome = step.handle(text, active.draft)

        match outcome:
            case Proceed():
                active.step_index += 1
                if active.step_index < len(active.flow.steps):
                    return StepPrompted(
                        step_index=active.step_index,
                        reply=await active.step.prompt(session),
                    )

                self._release(conversation_id, active)
                logger.info(
                    "Conversation %d completed flow %s",
                    conversation_id,
                    active.flow.name,
                )
                return FlowCompleted(
                    reply=await active.flow.commit(session, active.draft)
                )

            case Retry(message):
                logger.debug(
                    "Conversation %d: %s step %s rejected input",
                    conversation_id,
                    active.flow.name,
                    step.field,
                )
                prompt = await step.prompt(session)
                return StepRetried(
                    step_index=active.step_index,
                    reply=prompt.model_copy(
                        update={"text": f"{message}\n\n{prompt.text}"}
                    ),
                )

            case Abort(message):
                self._release(conversation_id, active)
                logger.info(
                    "Conversation %d aborted flow %s at step %s",
                    conversation_id,
                    active.flow.name,
                    step.field,
                )
                return FlowAborted(
                    reply=Reply(text=message, remove_keyboard=True)
                )

            case _:
                raise TypeError(
                    f"Step {step.field!r} returned unexpected outcome: {outcome!r}"
                )

    def evict_expired(self, now: datetime | None = None) -> int:
        """Drop every draft idle for longer than the TTL; returns how many."""
        if self.draft_ttl is None:
            return 0

        now = now or _now()
        expired = [
            (conversation_id, active)
            for conversation_id, active in self._active.items()
            if self._is_expired(active, now)
        ]
        for conversation_id, active in expired:
            self._release(conversation_id, active)

        if expired:
            logger.info("Evicted %d stale drafts", len(expired))
        return len(expired)

    def _is_expired(self, active: ActiveFlow[Any], now: datetime) -> bool:
        return (
            self.draft_ttl is not None
            and now - active.touched_at > self.draft_ttl
        )

    def _release(self, conversation_id: int, active: ActiveFlow[Any]) -> None:
        # A newer flow may have replaced this one while a commit was awaited.
        if self._active.get(conversation_id) is active:
            del self._active[conversation_id]
