from collections.abc import Generator
from unittest.mock import patch

import pytest

from devcensus.flows import StepEngine


@pytest.fixture(autouse=True)
def step_engine() -> Generator[StepEngine, None, None]:
    """Each handler test gets its own draft store."""
    engine = StepEngine()
    with patch("devcensus.bot.handlers.step_engine", engine):
        yield engine
