import sqlite3
from typing import Optional
from anatomy.database.repositories import (
    CreatureRepository,
    AnatomyTemplateRepository,
)

# Seconds a writer waits for another connection's BEGIN IMMEDIATE to finish
BUSY_TIMEOUT = 30.0


class DBManager:
    """
    One SQLite connection exposing the creature and template repositories.
    Open one manager per thread or process; writers on separate managers are
    serialized by the database lock.

    Usage:
        with DBManager("anatomy.db") as db:
            creature = db.creatures.get_model("goblin_01")
    """

    def __init__(self, db_path: str):
        self.db_path = db_path
        self.conn: Optional[sqlite3.Connection] = None
        self.creatures: Optional[CreatureRepository] = None
        self.anatomy_templates: Optional[AnatomyTemplateRepository] = None

    def __enter__(self):
        # Autocommit; CreatureRepository.update_with opens its own transactions
        self.conn = sqlite3.connect(self.db_path, timeout=BUSY_TIMEOUT, isolation_level=None)
        self.conn.execute("PRAGMA journal_mode=WAL;")
        self.conn.row_factory = sqlite3.Row

        self.creatures = CreatureRepository(self.conn)
        self.anatomy_templates = AnatomyTemplateRepository(self.conn)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.conn:
            self.conn.close()
            self.conn = None

    def create_tables(self):
        """Create the creatures and anatomy_templates tables if missing."""
        if not self.conn:
            with self as db:
                db.create_tables()
            return
        for repo in (self.creatures, self.anatomy_templates):
            repo.create_table()
