import asyncio

import pytest

from cinematic.analytics import Analytics, set_default_analytics
from cinematic.breakthrough.director import BreakthroughDirector, reset_breakthrough_director
from cinematic.breakthrough.history import BreakthroughHistory, set_default_history
from cinematic.breakthrough.scheduler import ManualScheduler
from cinematic.storage import MemoryStore


def run(coro):
    return asyncio.run(coro)


class RecordingTransport:
    def __init__(self):
        self.events = []

    def __call__(self, name, payload):
        self.events.append((name, payload))

    def names(self):
        return [name for name, _ in self.events]

    def of_type(self, event_type):
        return [payload for _, payload in self.events if payload["event_type"] == event_type]


@pytest.fixture(autouse=True)
def isolated_state(monkeypatch):
    monkeypatch.delenv("CINEMATIC_BREAKTHROUGH_V2", raising=False)
    monkeypatch.delenv("CINEMATIC_QUALITY_TIER", raising=False)
    history = BreakthroughHistory(store=MemoryStore())
    set_default_history(history)
    set_default_analytics(Analytics(store=MemoryStore()))
    yield history
    reset_breakthrough_director()
    set_default_history(None)
    set_default_analytics(None)


@pytest.fixture
def history(isolated_state):
    return isolated_state


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def analytics(transport):
    return Analytics(transport=transport, store=MemoryStore())


@pytest.fixture
def director(history, scheduler, analytics):
    d = BreakthroughDirector(history=history, scheduler=scheduler, analytics=analytics)
    yield d
    d.dispose()
