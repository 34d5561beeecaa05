"""Return types for step handlers and for the step engine."""

from dataclasses import dataclass

from ..types import Reply


class StepOutcome:
    """What a step handler decided about one inbound message."""


@dataclass
class Proceed(StepOutcome):
    """Input accepted (or skipped); move on to the next step."""

    pass


@dataclass
class Retry(StepOutcome):
    """Input rejected; stay on the same step and ask again."""

    message: str


@dataclass
class Abort(StepOutcome):
    """Give up on the flow and discard the draft."""

    message: str


class StepResult:
    """What the engine did with one inbound message."""


@dataclass
class StepPrompted(StepResult):
    step_index: int
    reply: Reply


@dataclass
class StepRetried(StepResult):
    step_index: int
    reply: Reply


@dataclass
class FlowCompleted(StepResult):
    reply: Reply


@dataclass
class FlowAborted(StepResult):
    reply: Reply


@dataclass
class NoActiveFlow(StepResult):
    """The conversation has no live draft (never entered, finished or expired)."""

    pass
