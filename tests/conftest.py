# File: tests/conftest.py
"""
Pytest configuration and shared fixtures.
Provides reusable event documents and workspaces for all tests.
"""

import os
import sys
import tempfile
import time
from pathlib import Path
from textwrap import dedent

import pytest
import pytz

# Add project root and scripts to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))
sys.path.insert(0, str(PROJECT_ROOT / "scripts"))

# Keep test logs out of the working directory
os.environ.setdefault("XCHEDULE_LOGS_DIR", str(Path(tempfile.gettempdir()) / "xchedule-test-logs"))

from xchedule.core.config_source import ConfigSource
from xchedule.core.event_builder import EventBuilder
from xchedule.core.time_resolver import TimeResolver


# ==================== Document Fixtures ====================

SINGLE_EVENT = dedent("""
    title: Go to Japan
    timezone: Asia/Taipei
    time: 2016-01-20 10:00 ~ 2016-01-21 11:03PM
    locations: Japan
    members:
        - Person A
        - Person B
        - Yang
        - Ohikiwa
    schedule:
        - event1
        - event2
        - event3
        - event4
    alerts:
        time:
            - 2016.01.19 10:00:00
    notes:
        - "OK"
    event1:
        title: "event1"
        time: 2016-01-20 10:00
    event2:
        title: "event2"
        time: 2016-01-20 12:00
    event3:
        title: "event3"
        time: 2016-01-20 15:00
""")

EVENT4 = dedent("""
    title: event4
    time: 2016-01-20 19:00
""")


@pytest.fixture
def write_event():
    """Return a helper writing an event document into a directory."""
    def _write(directory: Path, filename: str, content: str) -> Path:
        path = directory / filename
        path.write_text(dedent(content), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def single_event_source():
    """Root event document with three inline and one file schedule entry."""
    return ConfigSource.from_buffer(SINGLE_EVENT, "yaml")


@pytest.fixture
def workspace(tmp_path, write_event):
    """Workspace directory holding event4.yaml."""
    write_event(tmp_path, "event4.yaml", EVENT4)
    return tmp_path


@pytest.fixture
def empty_workspace(tmp_path):
    """Workspace directory with no event files."""
    return tmp_path


@pytest.fixture
def builder(workspace):
    """EventBuilder searching the shared workspace."""
    return EventBuilder(workspace=workspace)


@pytest.fixture
def resolver():
    return TimeResolver()


@pytest.fixture
def taipei():
    return pytz.timezone("Asia/Taipei")


@pytest.fixture
def local_tz(monkeypatch):
    """Pin the process-local timezone to America/New_York."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")

    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    yield pytz.timezone("America/New_York")
    monkeypatch.undo()
    time.tzset()
