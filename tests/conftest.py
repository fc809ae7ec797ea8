import random

import pytest

from mazebuilder.utils.config import LoggingConfig
from mazebuilder.utils.logger import setup_logging


class ScriptedRandom:
    """Random source that replays fixed cell draws and always picks the first candidate."""

    def __init__(self, draws):
        self.draws = list(draws)

    def randrange(self, stop):
        value = self.draws.pop(0)
        assert 0 <= value < stop
        return value

    def choice(self, seq):
        return seq[0]


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def scripted_random():
    return ScriptedRandom


@pytest.fixture(autouse=True)
def reset_logging():
    """Reinstall default handlers so no test leaves a captured stream behind."""
    yield
    setup_logging(LoggingConfig())
