"""
pytest configuration and fixtures.
"""

from typing import Any, List, Tuple
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from httpmock import MockResponse, create_response, ResponseConfig


class EventRecorder:
    """Listener that remembers which lifecycle events fired, in order."""

    EVENTS = ("send", "end", "render")

    def __init__(self):
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []

    def attach(self, res: MockResponse) -> "EventRecorder":
        for event in self.EVENTS:
            res.on(event, self._listener_for(event))
        return self

    def _listener_for(self, event: str):
        def listener(*args):
            self.calls.append((event, args))
        return listener

    @property
    def names(self) -> List[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def config() -> ResponseConfig:
    """Default test configuration."""
    return ResponseConfig()


@pytest.fixture
def res(config: ResponseConfig) -> MockResponse:
    """A fresh response for each test."""
    return create_response(config=config)


@pytest.fixture
def recorder(res: MockResponse) -> EventRecorder:
    """Records the lifecycle events emitted by the `res` fixture."""
    return EventRecorder().attach(res)
