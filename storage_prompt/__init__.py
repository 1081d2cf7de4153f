"""Storage Prompt - new removable storage detection and prompt flow."""

try:
    from storage_prompt._version import version as __version__
except ImportError:
    __version__ = "0.0.0.dev0"
