from __future__ import annotations

from pathlib import Path

import pytest
from support import RecordingListener

from prnotify.state import StorageBuilder


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def storage_builder() -> StorageBuilder:
    return StorageBuilder("history")


@pytest.fixture
def history_path(tmp_path: Path) -> Path:
    return tmp_path / "notify" / "history"
