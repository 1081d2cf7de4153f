"""Core data models for storage-prompt."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from storage_prompt.core.errors import InvalidEvent


class VolumeState(Enum):
    UNMOUNTED = "unmounted"
    CHECKING = "checking"
    MOUNTED = "mounted"
    MOUNTED_READ_ONLY = "mounted_ro"
    FORMATTING = "formatting"
    EJECTING = "ejecting"
    UNMOUNTABLE = "unmountable"
    REMOVED = "removed"
    BAD_REMOVAL = "bad_removal"

    @property
    def is_mounted(self) -> bool:
        return self in (VolumeState.MOUNTED, VolumeState.MOUNTED_READ_ONLY)


class VolumeType(Enum):
    PUBLIC = "public"  # removable, user-visible
    PRIVATE = "private"  # adopted / internal
    EMULATED = "emulated"
    ASEC = "asec"
    OBB = "obb"


@dataclass(frozen=True)
class Disk:
    id: str
    size: int  # bytes, 0 when no media is inserted
    volume_count: int = -1  # -1: unknown, suppresses the erase prompt
    adoptable: bool = False
    description: str = ""
    label: Optional[str] = None


@dataclass(frozen=True)
class Volume:
    id: str
    disk_id: Optional[str]
    state: VolumeState
    type: VolumeType
    fs_uuid: Optional[str] = None
    fs_label: Optional[str] = None


@dataclass(frozen=True)
class VolumeRecord:
    fs_uuid: str
    inited: bool = False
    snoozed: bool = False
    nickname: Optional[str] = None


@dataclass(frozen=True)
class PromptRequest:
    """Request to prompt the user about newly detected storage.

    Carries at least one of ``volume_id`` / ``disk_id`` and a non-empty
    description; anything else raises InvalidEvent.
    """

    description: str
    volume_id: Optional[str] = None
    disk_id: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.volume_id and not self.disk_id:
            raise InvalidEvent("Prompt request without volume or disk id")
        if not self.description:
            raise InvalidEvent("Prompt request without description")


# ── Events ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class DiskScanned:
    disk_id: Optional[str]
    volume_count: Optional[int] = None  # None: fall back to the disk snapshot


@dataclass(frozen=True)
class VolumeStateChanged:
    volume_id: Optional[str]
    new_state: VolumeState
