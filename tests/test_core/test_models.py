"""Tests for storage_prompt.core.models."""

from __future__ import annotations

import dataclasses

import pytest

from storage_prompt.core.errors import InvalidEvent, StoragePromptError
from storage_prompt.core.models import PromptRequest, VolumeState


class TestPromptRequest:
    def test_disk_only(self):
        r = PromptRequest(disk_id="disk1", description="USB Drive")
        assert r.volume_id is None

    def test_requires_an_identifier(self):
        with pytest.raises(InvalidEvent):
            PromptRequest(description="USB Drive")
        with pytest.raises(InvalidEvent):
            PromptRequest(volume_id="", disk_id="", description="USB Drive")

    def test_requires_description(self):
        with pytest.raises(InvalidEvent):
            PromptRequest(disk_id="disk1", description="")

    def test_is_immutable(self):
        r = PromptRequest(disk_id="disk1", description="USB Drive")
        with pytest.raises(dataclasses.FrozenInstanceError):
            r.disk_id = "disk2"


class TestVolumeState:
    def test_mounted_states(self):
        mounted = {s for s in VolumeState if s.is_mounted}
        assert mounted == {VolumeState.MOUNTED, VolumeState.MOUNTED_READ_ONLY}

    def test_lookup_by_value(self):
        assert VolumeState("mounted_ro") is VolumeState.MOUNTED_READ_ONLY


class TestErrors:
    def test_invalid_event_is_storage_prompt_error(self):
        assert issubclass(InvalidEvent, StoragePromptError)
