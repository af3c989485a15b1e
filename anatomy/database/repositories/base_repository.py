"""Base repository for JSON-document tables."""

from abc import ABC, abstractmethod
from contextlib import contextmanager
import json
import sqlite3
from typing import Any, Dict, Iterator, List, Optional


class BaseRepository(ABC):
    """
    Shared plumbing for repositories that keep one JSON document per row.
    The connection is expected in autocommit mode (isolation_level=None).
    """

    def __init__(self, connection: sqlite3.Connection):
        self.conn = connection

    @abstractmethod
    def create_table(self):
        """Create this repository's table if it does not exist yet."""

    def _execute(self, query: str, params: tuple = ()) -> sqlite3.Cursor:
        return self.conn.execute(query, params)

    def _fetchone(self, query: str, params: tuple = ()) -> Optional[sqlite3.Row]:
        return self._execute(query, params).fetchone()

    def _fetchall(self, query: str, params: tuple = ()) -> List[sqlite3.Row]:
        return self._execute(query, params).fetchall()

    def _fetch_document(self, query: str, params: tuple = ()) -> Optional[Dict[str, Any]]:
        """
        Run a query selecting a single JSON column and decode it.
        Returns None when the row is missing, empty or not valid JSON.
        """
        row = self._fetchone(query, params)
        if not row or not row[0]:
            return None
        try:
            return json.loads(row[0])
        except json.JSONDecodeError:
            return None

    def _commit(self):
        self.conn.commit()

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        """Run a block under the database write lock (BEGIN IMMEDIATE)."""
        self.conn.execute("BEGIN IMMEDIATE")
        try:
            yield self.conn
        except BaseException:
            self.conn.execute("ROLLBACK")
            raise
        else:
            self.conn.execute("COMMIT")
