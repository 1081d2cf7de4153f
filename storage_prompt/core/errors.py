"""Error taxonomy for storage-prompt.

None of these escape to the process: the classifier and the prompt flow
catch them, log, and degrade to "no prompt" / "cancel".
"""

from __future__ import annotations


class StoragePromptError(Exception):
    pass


class InvalidEvent(StoragePromptError):
    """An incoming event or request is missing a required identifier."""


class UnknownVolume(StoragePromptError):
    """A referenced volume is not in the current volume list."""


class MissingDiskId(StoragePromptError):
    """Adopt was selected for a request that carries no disk id."""
