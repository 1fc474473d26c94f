"""Import record source protocol — all package listers conform to this interface."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from depzoom.model import ImportRecord, Module


class ImportRecordSource(Protocol):
    """Protocol for tools that list the packages of a module and their imports."""

    def list_packages(self, module: Module) -> Iterable[ImportRecord]:
        """Return the packages of *module*.

        Raises :class:`~depzoom.errors.CollaboratorError` if the module
        cannot be listed.
        """
        ...
