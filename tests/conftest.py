"""
Pytest configuration for sqlscenario tests.

The database is replaced with a recording channel, so the tests do not need a
running server.
"""

import pytest

from sqlscenario import config as sqlscenario_config
from sqlscenario import db

pytest_plugins = ["pytester"]


class DriverError(Exception):
    """Stands in for an exception raised by a database driver."""


class RecordingChannel:
    def __init__(self, recorder):
        self.recorder = recorder

    def execute(self, statement):
        if self.recorder.fail_on and self.recorder.fail_on in statement:
            raise DriverError(f"table {self.recorder.fail_on} doesn't exist")
        self.recorder.executed.append(statement)

    def close(self):
        self.recorder.closed += 1


class ChannelRecorder:
    def __init__(self):
        self.executed = []
        self.opened = 0
        self.closed = 0
        self.fail_on = None
        self.error = DriverError

    def open(self, cfg={}):
        self.opened += 1
        return RecordingChannel(self)


@pytest.fixture(autouse=True)
def fresh_config():
    """Every test reads the configuration again."""
    sqlscenario_config.reset_config()
    yield
    sqlscenario_config.reset_config()


@pytest.fixture
def channel(monkeypatch):
    """Records the statements executed through sqlscenario.db.open_channel()."""
    recorder = ChannelRecorder()
    monkeypatch.setattr(db, "open_channel", recorder.open)
    return recorder
