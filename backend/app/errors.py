from __future__ import annotations


class StoreError(Exception):
    """Base class for backing-store failures."""


class StoreConfigError(StoreError):
    """Store selection or embedded-file discovery failed."""


class StoreUnavailableError(StoreError):
    """A backing store could not be initialized or reached."""
