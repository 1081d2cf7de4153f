"""Storage metadata providers."""

from __future__ import annotations

from storage_prompt.providers.base import StorageProvider
from storage_prompt.providers.snapshot import SnapshotStorageProvider, load_snapshot

__all__ = ["StorageProvider", "SnapshotStorageProvider", "load_snapshot"]
