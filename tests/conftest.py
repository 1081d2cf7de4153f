"""Shared test fixtures for storage-prompt tests."""

from __future__ import annotations

import json
import logging
from typing import Any
from unittest.mock import MagicMock

import pytest

from storage_prompt.core.actions import ActionTargets
from storage_prompt.core.models import (
    Disk,
    Volume,
    VolumeState,
    VolumeType,
)
from storage_prompt.data.store import DataStore
from storage_prompt.providers.snapshot import SnapshotStorageProvider


@pytest.fixture
def usb_disk() -> Disk:
    """Adoptable 16 GB USB stick with no usable volumes yet."""
    return Disk(
        id="disk:8,0",
        size=16_000_000_000,
        volume_count=0,
        adoptable=True,
        description="SanDisk USB drive",
    )


@pytest.fixture
def public_volume() -> Volume:
    return Volume(
        id="public:8,1",
        disk_id="disk:8,0",
        state=VolumeState.MOUNTED,
        type=VolumeType.PUBLIC,
        fs_uuid="ABCD-1234",
        fs_label="MYSTICK",
    )


@pytest.fixture
def provider(usb_disk, public_volume) -> SnapshotStorageProvider:
    """Provider with one adoptable disk, one fresh public volume, no records."""
    return SnapshotStorageProvider(disks=[usb_disk], volumes=[public_volume])


@pytest.fixture
def mock_targets() -> MagicMock:
    """ActionTargets double recording every hand-off."""
    return MagicMock(spec=ActionTargets)


@pytest.fixture
def temp_db(tmp_path):
    """DataStore with a temporary SQLite database."""
    db_path = str(tmp_path / "test.db")
    store = DataStore(db_path=db_path)
    yield store
    store.close()


def snapshot_data() -> dict[str, Any]:
    """Snapshot covering every classifier branch."""
    return {
        "disks": [
            {"id": "disk:8,0", "size": 16000000000, "volume_count": 0,
             "adoptable": True, "description": "SanDisk USB drive"},
            {"id": "disk:8,16", "size": 0, "volume_count": 0,
             "adoptable": True, "description": "Card reader"},
            {"id": "disk:8,32", "size": 64000000000, "volume_count": 1,
             "adoptable": True, "description": "Kingston USB drive"},
        ],
        "volumes": [
            {"id": "public:8,33", "disk_id": "disk:8,32", "state": "mounted",
             "type": "public", "fs_uuid": "1111-2222", "fs_label": "KINGSTON"},
        ],
        "records": [],
        "events": [
            {"action": "disk_scanned", "disk_id": "disk:8,0", "volume_count": 0},
            {"action": "disk_scanned", "disk_id": "disk:8,16", "volume_count": 0},
            {"action": "disk_scanned", "disk_id": "disk:8,32", "volume_count": 1},
            {"action": "volume_state_changed", "volume_id": "public:8,33",
             "state": "mounted"},
        ],
    }


@pytest.fixture
def snapshot() -> dict[str, Any]:
    return snapshot_data()


@pytest.fixture
def snapshot_file(tmp_path, snapshot) -> str:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot))
    return str(path)


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Undo setup_logging() so caplog keeps seeing package records."""
    yield
    logger = logging.getLogger("storage_prompt")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
