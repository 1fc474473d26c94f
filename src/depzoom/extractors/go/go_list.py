"""List Go packages and their imports via ``go list -json``."""

from __future__ import annotations

import json
import logging
import re
import shutil
import subprocess
from collections.abc import Iterator

from depzoom.errors import CollaboratorError, DecodeError
from depzoom.model import ImportRecord, Module

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s*")
_decoder = json.JSONDecoder()


class GoListSource:
    """Run ``go list -json ./...`` inside each module directory."""

    def __init__(self, *, go: str | None = None, timeout: float | None = None):
        self._go = go
        self._timeout = timeout

    def list_packages(self, module: Module) -> list[ImportRecord]:
        go_path = self._go or shutil.which("go")
        if not go_path:
            raise CollaboratorError(
                "go not found on PATH — install the Go toolchain to list packages"
            )

        try:
            result = subprocess.run(
                [go_path, "list", "-json", "./..."],
                capture_output=True,
                text=True,
                cwd=module.dir,
                timeout=self._timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise CollaboratorError(f"could not run go list in {module.dir}: {e}") from e

        if result.returncode != 0:
            raise CollaboratorError(
                f"go list failed in {module.dir}: "
                f"{result.stderr.strip() if result.stderr else 'unknown error'}"
            )

        records = list(decode_records(result.stdout))
        logger.debug("go list: %d packages in %s", len(records), module.path)
        return records


def decode_records(text: str) -> Iterator[ImportRecord]:
    """Decode a stream of concatenated JSON package objects.

    Records that are not valid package objects are logged and skipped.  After
    a JSON syntax error, decoding resumes at the next line starting with
    ``{`` (``go list`` writes each top-level object from column 0).
    """
    pos = _WHITESPACE.match(text, 0).end()
    while pos < len(text):
        try:
            obj, end = _decoder.raw_decode(text, pos)
        except json.JSONDecodeError as e:
            logger.warning("Skipping undecodable package record: %s", e)
            resume = text.find("\n{", pos + 1)
            if resume < 0:
                return
            pos = resume + 1
            continue

        pos = _WHITESPACE.match(text, end).end()
        try:
            record = _to_record(obj)
        except DecodeError as e:
            logger.warning("Skipping undecodable package record: %s", e)
            continue
        yield record


def _to_record(obj: object) -> ImportRecord:
    if not isinstance(obj, dict):
        raise DecodeError(f"expected a JSON object, got {type(obj).__name__}")

    import_path = obj.get("ImportPath")
    if not isinstance(import_path, str) or not import_path:
        raise DecodeError("package record has no ImportPath")

    imports = obj.get("Imports") or []
    if not isinstance(imports, list) or not all(isinstance(i, str) for i in imports):
        raise DecodeError(f"package {import_path} has a malformed Imports list")

    return ImportRecord(import_path=import_path, imports=list(imports))
