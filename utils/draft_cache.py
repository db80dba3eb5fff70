"""SQLite auto-save snapshot of the current draft"""
import sqlite3
from dataclasses import dataclass
from typing import Dict, Optional
import json
import logging
import config
from core.errors import ContentParseError
from core.models import SectionList, utc_now_iso

logger = logging.getLogger(__name__)

_SNAPSHOT_ID = 1


@dataclass
class DraftSnapshot:
    """Sections and form values saved locally"""

    sections: SectionList
    form: Dict
    saved_at: str


class DraftCache:
    """Single-row SQLite store for the in-progress draft

    The snapshot is overwritten on every save; the most recent write wins.
    """

    def __init__(self, db_path: Optional[str] = None):
        """Initialize cache

        Args:
            db_path: Path to SQLite database. If None, uses config.DRAFT_DB_PATH
        """
        self.db_path = db_path or config.DRAFT_DB_PATH
        self._init_db()

    def _init_db(self):
        """Initialize database table"""
        conn = sqlite3.connect(self.db_path)
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS drafts (
                    id INTEGER PRIMARY KEY,
                    sections TEXT NOT NULL,
                    form TEXT NOT NULL,
                    saved_at TEXT NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    def save(self, sections: SectionList, form: Dict) -> str:
        """Overwrite the snapshot

        Args:
            sections: Current sections
            form: Current form values

        Returns:
            The saved_at timestamp written
        """
        saved_at = utc_now_iso()
        conn = sqlite3.connect(self.db_path)
        try:
            conn.execute(
                """
                INSERT OR REPLACE INTO drafts (id, sections, form, saved_at)
                VALUES (?, ?, ?, ?)
                """,
                (_SNAPSHOT_ID, sections.to_json(), json.dumps(form, ensure_ascii=False), saved_at),
            )
            conn.commit()
        finally:
            conn.close()
        logger.debug(f"Draft snapshot saved ({len(sections)} sections)")
        return saved_at

    def load(self) -> Optional[DraftSnapshot]:
        """Read the snapshot back

        Returns:
            DraftSnapshot, or None if nothing is saved or the stored data is corrupt
        """
        conn = sqlite3.connect(self.db_path)
        try:
            row = conn.execute(
                "SELECT sections, form, saved_at FROM drafts WHERE id = ?",
                (_SNAPSHOT_ID,),
            ).fetchone()
        finally:
            conn.close()

        if not row:
            return None

        try:
            sections = SectionList.from_json(row[0])
            form = json.loads(row[1])
            if not isinstance(form, dict):
                raise ContentParseError("Stored form is not an object")
        except (ContentParseError, json.JSONDecodeError) as e:
            logger.error(f"Discarding corrupt draft snapshot: {e}")
            return None

        return DraftSnapshot(sections=sections, form=form, saved_at=row[2])

    def clear(self):
        """Delete the snapshot"""
        conn = sqlite3.connect(self.db_path)
        try:
            conn.execute("DELETE FROM drafts")
            conn.commit()
            logger.info("Draft snapshot cleared")
        finally:
            conn.close()
