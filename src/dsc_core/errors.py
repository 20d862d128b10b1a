"""Exception types for DSC Core."""

from __future__ import annotations


class DSCCoreError(Exception):
    """Base class for all DSC Core errors."""


class UnsupportedValueError(DSCCoreError, TypeError):
    """A value reached a formatter that cannot express it."""


class SettingsError(DSCCoreError, ValueError):
    """Render settings failed validation."""
