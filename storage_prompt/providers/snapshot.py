"""In-memory StorageProvider built from a JSON snapshot of the storage service."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, Protocol

from storage_prompt.core.models import (
    Disk,
    Volume,
    VolumeRecord,
    VolumeState,
    VolumeType,
)
from storage_prompt.providers.base import StorageProvider

logger = logging.getLogger(__name__)


class RecordSource(Protocol):
    def get_record(self, fs_uuid: str) -> Optional[VolumeRecord]: ...


def load_snapshot(path: str) -> dict[str, Any]:
    """Read a snapshot file. Raises OSError / ValueError on bad input."""
    with open(path) as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Snapshot {path!r} must contain a JSON object")
    return data


def disk_from_dict(raw: dict[str, Any]) -> Disk:
    return Disk(
        id=raw["id"],
        size=int(raw.get("size", 0)),
        volume_count=int(raw.get("volume_count", -1)),
        adoptable=bool(raw.get("adoptable", False)),
        description=raw.get("description", ""),
        label=raw.get("label"),
    )


def volume_from_dict(raw: dict[str, Any]) -> Volume:
    return Volume(
        id=raw["id"],
        disk_id=raw.get("disk_id"),
        state=VolumeState(raw.get("state", VolumeState.UNMOUNTED.value)),
        type=VolumeType(raw.get("type", VolumeType.PUBLIC.value)),
        fs_uuid=raw.get("fs_uuid"),
        fs_label=raw.get("fs_label"),
    )


def record_from_dict(raw: dict[str, Any]) -> VolumeRecord:
    return VolumeRecord(
        fs_uuid=raw["fs_uuid"],
        inited=bool(raw.get("inited", False)),
        snoozed=bool(raw.get("snoozed", False)),
        nickname=raw.get("nickname"),
    )


class SnapshotStorageProvider(StorageProvider):
    """Serves disks, volumes and records from fixed in-memory collections.

    When a ``record_source`` is given (e.g. the local DataStore), its records
    take precedence over the ones in the snapshot.
    """

    def __init__(
        self,
        disks: Optional[list[Disk]] = None,
        volumes: Optional[list[Volume]] = None,
        records: Optional[list[VolumeRecord]] = None,
        record_source: Optional[RecordSource] = None,
    ):
        self._disks = {d.id: d for d in disks or []}
        self._volumes = list(volumes or [])
        self._records = {r.fs_uuid: r for r in records or []}
        self._record_source = record_source

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        record_source: Optional[RecordSource] = None,
    ) -> "SnapshotStorageProvider":
        """Build a provider from snapshot data. Raises ValueError on bad entries."""
        try:
            disks = [disk_from_dict(d) for d in data.get("disks", [])]
            volumes = [volume_from_dict(v) for v in data.get("volumes", [])]
            records = [record_from_dict(r) for r in data.get("records", [])]
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed snapshot entry: {e}") from e
        logger.debug(
            "Loaded snapshot: %d disk(s), %d volume(s), %d record(s)",
            len(disks), len(volumes), len(records),
        )
        return cls(disks, volumes, records, record_source=record_source)

    def find_disk_by_id(self, disk_id: str) -> Optional[Disk]:
        return self._disks.get(disk_id)

    def find_volume_by_id(self, volume_id: str) -> Optional[Volume]:
        for volume in self._volumes:
            if volume.id == volume_id:
                return volume
        return None

    def list_volumes(self) -> list[Volume]:
        return list(self._volumes)

    def find_record_by_uuid(self, fs_uuid: str) -> Optional[VolumeRecord]:
        if self._record_source is not None:
            record = self._record_source.get_record(fs_uuid)
            if record is not None:
                return record
        return self._records.get(fs_uuid)

    def get_best_volume_description(self, volume: Volume) -> Optional[str]:
        """Nickname from the volume record, then disk description, then fs label."""
        if volume.fs_uuid:
            record = self.find_record_by_uuid(volume.fs_uuid)
            if record and record.nickname:
                return record.nickname

        if volume.disk_id:
            disk = self.find_disk_by_id(volume.disk_id)
            if disk and disk.description:
                return disk.description

        return volume.fs_label or None
