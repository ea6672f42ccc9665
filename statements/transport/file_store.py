"""
File-based statement store using append-only JSONL format.

Each line is one statement record: {"id": ..., "kind": ..., "xapi": {...}, "caliper": {...}}.
"""

import json
import os
from typing import IO, Iterator, Set

from ..core.canonical import canonical_json_str
from ..core.errors import TransportError
from ..core.statement import RenderedStatement
from ..logging_config import get_logger
from .store import DispatchResult, StatementStore

try:
    import fcntl
except ImportError:  # Windows or unsupported platform
    fcntl = None


class FileStatementStore(StatementStore):
    """
    File-based append-only statement store.

    Storage format: JSONL (newline-delimited canonical JSON)

    Guarantees:
    - Append-only (no mutations)
    - Fsync after each append (durability)
    - One record per statement id (re-sends are reported as duplicates)
    """

    def __init__(self, path: str) -> None:
        """
        Initialize file statement store.

        Args:
            path: Path to JSONL file

        Raises:
            TransportError: If the file or its directory cannot be created
        """
        self.path = path
        self._ids: Set[str] = set()
        self._offset = 0
        try:
            os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
            if not os.path.exists(path):
                with open(path, "wb") as f:
                    f.write(b"")
        except OSError as ex:
            raise TransportError(str(ex)) from ex

    def _refresh_ids(self, f: IO[bytes]) -> Set[str]:
        """
        Extend the id index with lines appended since the last scan.

        Must be called with the file lock held. Scanning resumes at the byte
        offset reached by the previous call, so appends made by other
        processes are indexed too.
        """
        f.seek(0, os.SEEK_END)
        end = f.tell()
        if end < self._offset:
            self._ids = set()
            self._offset = 0

        f.seek(self._offset)
        for line in f:
            if line.strip():
                self._ids.add(json.loads(line)["id"])
            self._offset += len(line)
        return self._ids

    def send(self, statement: RenderedStatement) -> DispatchResult:
        """
        Append statement to the log unless its id is already stored.

        Raises:
            TransportError: If the append fails or the log is corrupt
        """
        logger = get_logger(__name__, trace_id=statement.id)
        try:
            with open(self.path, "a+b") as f:
                if fcntl:
                    fcntl.flock(f.fileno(), fcntl.LOCK_EX)
                try:
                    if statement.id in self._refresh_ids(f):
                        logger.debug("Statement already stored", extra={"path": self.path})
                        return DispatchResult(
                            statement_id=statement.id,
                            location=self.path,
                            committed=False,
                            duplicate=True,
                        )

                    line = canonical_json_str(statement.to_record()) + "\n"
                    f.seek(0, os.SEEK_END)
                    f.write(line.encode("utf-8"))
                    f.flush()
                    os.fsync(f.fileno())
                    self._ids.add(statement.id)
                    self._offset = f.tell()
                finally:
                    if fcntl:
                        fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        except (OSError, ValueError, KeyError, TypeError) as ex:
            raise TransportError(f"append to {self.path} failed: {ex}") from ex

        logger.debug("Statement appended", extra={"path": self.path})
        return DispatchResult(statement_id=statement.id, location=self.path, committed=True)

    def read(self) -> Iterator[RenderedStatement]:
        """
        Read statements in append order.

        Raises:
            TransportError: If the log cannot be read or parsed
        """
        try:
            with open(self.path, "rb") as f:
                for line in f:
                    if not line.strip():
                        continue
                    yield RenderedStatement.from_record(json.loads(line))
        except (OSError, ValueError, KeyError, TypeError) as ex:
            raise TransportError(f"read of {self.path} failed: {ex}") from ex

