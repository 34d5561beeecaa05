from .engine import ActiveFlow, Flow, Step, StepEngine
from .registration import REGISTRATION_FLOW, RegistrationDraft
from .results import (
    Abort,
    FlowAborted,
    FlowCompleted,
    NoActiveFlow,
    Proceed,
    Retry,
    StepPrompted,
    StepResult,
    StepRetried,
)
from .search import SEARCH_FLOW, SearchDraft
from .steps import SKIP_TOKEN

__all__ = [
    "ActiveFlow",
    "Flow",
    "Step",
    "StepEngine",
    "REGISTRATION_FLOW",
    "RegistrationDraft",
    "SEARCH_FLOW",
    "SearchDraft",
    "SKIP_TOKEN",
    "Abort",
    "Proceed",
    "Retry",
    "StepResult",
    "StepPrompted",
    "StepRetried",
    "FlowCompleted",
    "FlowAborted",
    "NoActiveFlow",
]
