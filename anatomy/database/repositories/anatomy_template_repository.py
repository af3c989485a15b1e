"""Repository for anatomy template documents."""

import json
from typing import Any, Dict, List, Optional

from anatomy.errors import NotFoundError
from anatomy.models.body import AnatomyInfo
from .base_repository import BaseRepository


class AnatomyTemplateRepository(BaseRepository):
    """
    Stores raw anatomy template documents keyed by anatomy id.
    Also serves as a template source for the AnatomyRegistry.
    """

    def create_table(self):
        """Creates the anatomy_templates table."""
        cursor = self.conn.cursor()
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS anatomy_templates (
                anatomy_id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                category TEXT NOT NULL DEFAULT 'general',
                description TEXT NOT NULL DEFAULT '',
                disabled BOOLEAN DEFAULT 0,
                is_builtin BOOLEAN DEFAULT 0,
                data_json TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            );
            """
        )
        self.conn.commit()

    def upsert(self, info: AnatomyInfo, document: Dict[str, Any], is_builtin: bool = False):
        """Insert a template or replace the stored one with the same id."""
        self._execute(
            """INSERT INTO anatomy_templates
                   (anatomy_id, name, category, description, disabled, is_builtin, data_json)
               VALUES (?, ?, ?, ?, ?, ?, ?)
               ON CONFLICT(anatomy_id)
               DO UPDATE SET
                   name = excluded.name,
                   category = excluded.category,
                   description = excluded.description,
                   disabled = excluded.disabled,
                   is_builtin = excluded.is_builtin,
                   data_json = excluded.data_json,
                   updated_at = CURRENT_TIMESTAMP""",
            (
                info.id,
                info.name,
                info.category,
                info.description,
                1 if info.disabled else 0,
                1 if is_builtin else 0,
                json.dumps(document),
            ),
        )
        self._commit()

    def get_document(self, anatomy_id: str) -> Optional[Dict[str, Any]]:
        return self._fetch_document(
            "SELECT data_json FROM anatomy_templates WHERE anatomy_id = ?", (anatomy_id,)
        )

    def get_all(self) -> List[Dict[str, Any]]:
        """
        Get all templates (metadata only).
        Returns list of dicts: {'id', 'name', 'category', 'description', 'disabled', 'is_builtin'}
        """
        rows = self._fetchall(
            """SELECT anatomy_id, name, category, description, disabled, is_builtin
               FROM anatomy_templates ORDER BY anatomy_id"""
        )
        return [
            {
                "id": row["anatomy_id"],
                "name": row["name"],
                "category": row["category"],
                "description": row["description"],
                "disabled": bool(row["disabled"]),
                "is_builtin": bool(row["is_builtin"]),
            }
            for row in rows
        ]

    def delete(self, anatomy_id: str):
        self._execute("DELETE FROM anatomy_templates WHERE anatomy_id = ?", (anatomy_id,))
        self._commit()

    # --- TemplateSource interface ---

    def get_index(self) -> Dict[str, Any]:
        anatomies = {}
        for entry in self.get_all():
            entry.pop("is_builtin")
            anatomies[entry["id"]] = entry
        return {"anatomies": anatomies, "meta": {}}

    def fetch(self, anatomy_id: str, info: Optional[AnatomyInfo] = None) -> Dict[str, Any]:
        document = self.get_document(anatomy_id)
        if document is None:
            raise NotFoundError(f"Anatomy '{anatomy_id}' has no stored template")
        return document

    def __repr__(self):
        return "AnatomyTemplateRepository()"
