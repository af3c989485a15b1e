"""Repository for creature documents (anatomy + injury ledger)."""

import copy
import json
import logging
import sqlite3
from typing import Any, Callable, Dict, List, Optional, Union

from anatomy.errors import NotFoundError
from anatomy.models.creature import Creature
from anatomy.utils.paths import apply_changes
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)

ChangeBuilder = Callable[[Dict[str, Any]], Optional[Dict[str, Any]]]


class CreatureRepository(BaseRepository):
    """
    Handles all creature state related database operations.

    Every write is a path-addressed partial update applied to the stored JSON
    document inside one BEGIN IMMEDIATE transaction, so concurrent writers
    against the same creature are serialized and never lose each other's
    changes.
    """

    def create_table(self):
        cursor = self.conn.cursor()
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS creatures (
                creature_id TEXT PRIMARY KEY,
                name TEXT NOT NULL DEFAULT '',
                state_data TEXT NOT NULL,
                version INTEGER NOT NULL DEFAULT 1,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            );
            """
        )
        self.conn.commit()

    def create(self, creature: Union[Creature, Dict[str, Any]]) -> int:
        """Create or replace a creature document. Returns version number."""
        if not isinstance(creature, Creature):
            creature = Creature.model_validate(creature)
        state_json = creature.model_dump_json()

        cursor = self._execute(
            """INSERT INTO creatures (creature_id, name, state_data, version)
               VALUES (?, ?, ?, 1)
               ON CONFLICT(creature_id)
               DO UPDATE SET
                   name = excluded.name,
                   state_data = excluded.state_data,
                   version = version + 1,
                   updated_at = CURRENT_TIMESTAMP
               RETURNING version""",
            (creature.id, creature.name, state_json),
        )
        rows = cursor.fetchall()
        self._commit()
        return rows[0]["version"] if rows else 1

    def get(self, creature_id: str) -> Dict[str, Any]:
        """Retrieve a creature document, or an empty dict if it does not exist."""
        document = self._fetch_document(
            "SELECT state_data FROM creatures WHERE creature_id = ?", (creature_id,)
        )
        return document or {}

    def get_model(self, creature_id: str) -> Optional[Creature]:
        data = self.get(creature_id)
        return Creature.model_validate(data) if data else None

    def get_version(self, creature_id: str) -> Optional[int]:
        row = self._fetchone(
            "SELECT version FROM creatures WHERE creature_id = ?", (creature_id,)
        )
        return row["version"] if row else None

    def update(self, creature_id: str, changes: Dict[str, Any]) -> int:
        """
        Apply path-addressed changes in one transaction. Returns version number.

        Raises:
            NotFoundError: if the creature does not exist
        """
        version = self.update_with(creature_id, lambda _doc: changes)
        return version if version is not None else self.get_version(creature_id)

    def update_with(self, creature_id: str, build_changes: ChangeBuilder) -> Optional[int]:
        """
        Read-modify-write under the write lock.

        build_changes receives a private copy of the current document and
        returns the changes to apply; returning None or {} skips the write.
        Exceptions raised by build_changes roll the transaction back and
        propagate. Returns the new version, or None when nothing was written.
        """
        try:
            with self._transaction():
                row = self._fetchone(
                    "SELECT state_data FROM creatures WHERE creature_id = ?", (creature_id,)
                )
                if not row:
                    raise NotFoundError(f"Creature '{creature_id}' not found")

                document = json.loads(row["state_data"])
                changes = build_changes(copy.deepcopy(document))
                if not changes:
                    return None

                apply_changes(document, changes)
                # Round-trip through the model so a bad patch can never be persisted
                creature = Creature.model_validate(document)

                cursor = self._execute(
                    """UPDATE creatures
                       SET name = ?, state_data = ?, version = version + 1,
                           updated_at = CURRENT_TIMESTAMP
                       WHERE creature_id = ?
                       RETURNING version""",
                    (creature.name, creature.model_dump_json(), creature_id),
                )
                return cursor.fetchall()[0]["version"]
        except sqlite3.Error as e:
            logger.error(f"Error saving creature {creature_id}: {e}")
            raise

    def delete(self, creature_id: str):
        """Delete a specific creature."""
        self._execute("DELETE FROM creatures WHERE creature_id = ?", (creature_id,))
        self._commit()

    def list_ids(self) -> List[str]:
        rows = self._fetchall("SELECT creature_id FROM creatures ORDER BY creature_id")
        return [row["creature_id"] for row in rows]
