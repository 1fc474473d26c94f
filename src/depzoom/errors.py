"""Exceptions raised while building dependency graphs."""

from __future__ import annotations


class DepzoomError(Exception):
    """Base class for depzoom errors."""


class DiscoveryError(DepzoomError):
    """The project tree or one of its go.mod files could not be read."""


class CollaboratorError(DepzoomError):
    """Listing the packages of one module failed."""


class DecodeError(DepzoomError):
    """A single package record could not be decoded."""


class ConsistencyError(DepzoomError):
    """An edge refers to a package missing from the hierarchy."""
