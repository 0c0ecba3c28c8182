"""Shared error types for intlru."""

from __future__ import annotations


class IntLruError(Exception):
    """Base error type for intlru."""


class ConfigurationError(IntLruError, ValueError):
    """Raised when a cache is constructed with an invalid capacity."""


class InputError(IntLruError, ValueError):
    """Raised when a key, value or trace is invalid or unsupported."""


class CapacityError(IntLruError, RuntimeError):
    """Raised when the slot pool has no free slot left."""


class InvariantError(IntLruError, AssertionError):
    """Raised when the list/index bookkeeping is found inconsistent."""
