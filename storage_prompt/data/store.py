"""Local data store — SQLite at ~/.storage-prompt/data.db."""

from __future__ import annotations

import os
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional

from storage_prompt.core.models import VolumeRecord


_DEFAULT_DB_PATH = os.path.join(
    str(Path.home()), ".storage-prompt", "data.db"
)

_SCHEMA = """\
CREATE TABLE IF NOT EXISTS volume_records (
    fs_uuid TEXT PRIMARY KEY,
    inited INTEGER NOT NULL DEFAULT 0,
    snoozed INTEGER NOT NULL DEFAULT 0,
    nickname TEXT,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS config (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);

INSERT OR IGNORE INTO config (key, value) VALUES ('log_level', 'WARNING');
INSERT OR IGNORE INTO config (key, value) VALUES ('default_choice', 'ask');
"""


def default_db_path() -> str:
    return os.environ.get("STORAGE_PROMPT_DB") or _DEFAULT_DB_PATH


class DataStore:
    """Local SQLite data store."""

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or default_db_path()
        os.makedirs(os.path.dirname(self.db_path) or ".", exist_ok=True)
        self._conn: Optional[sqlite3.Connection] = None
        self._init_db()

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = sqlite3.connect(self.db_path)
            self._conn.row_factory = sqlite3.Row
        return self._conn

    def _init_db(self) -> None:
        conn = self._get_conn()
        conn.executescript(_SCHEMA)
        conn.commit()

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None

    # ── Config ───────────────────────────────────────────────────────

    def get_config(self, key: str) -> Optional[str]:
        conn = self._get_conn()
        row = conn.execute(
            "SELECT value FROM config WHERE key = ?", (key,)
        ).fetchone()
        return row["value"] if row else None

    def set_config(self, key: str, value: str) -> None:
        conn = self._get_conn()
        conn.execute(
            "INSERT OR REPLACE INTO config (key, value) VALUES (?, ?)",
            (key, value),
        )
        conn.commit()

    # ── Volume records ───────────────────────────────────────────────

    def get_record(self, fs_uuid: str) -> Optional[VolumeRecord]:
        conn = self._get_conn()
        row = conn.execute(
            "SELECT * FROM volume_records WHERE fs_uuid = ?", (fs_uuid,)
        ).fetchone()
        return self._row_to_record(row) if row else None

    def list_records(self) -> list[VolumeRecord]:
        conn = self._get_conn()
        rows = conn.execute(
            "SELECT * FROM volume_records ORDER BY fs_uuid"
        ).fetchall()
        return [self._row_to_record(r) for r in rows]

    def upsert_record(
        self,
        fs_uuid: str,
        inited: Optional[bool] = None,
        snoozed: Optional[bool] = None,
        nickname: Optional[str] = None,
    ) -> VolumeRecord:
        """Create or update a record; fields left as None keep their value."""
        existing = self.get_record(fs_uuid) or VolumeRecord(fs_uuid=fs_uuid)
        record = VolumeRecord(
            fs_uuid=fs_uuid,
            inited=existing.inited if inited is None else inited,
            snoozed=existing.snoozed if snoozed is None else snoozed,
            nickname=existing.nickname if nickname is None else nickname,
        )
        conn = self._get_conn()
        conn.execute(
            """INSERT OR REPLACE INTO volume_records
               (fs_uuid, inited, snoozed, nickname, updated_at)
               VALUES (?, ?, ?, ?, ?)""",
            (
                record.fs_uuid,
                int(record.inited),
                int(record.snoozed),
                record.nickname,
                datetime.now().isoformat(),
            ),
        )
        conn.commit()
        return record

    def delete_record(self, fs_uuid: str) -> bool:
        conn = self._get_conn()
        cur = conn.execute(
            "DELETE FROM volume_records WHERE fs_uuid = ?", (fs_uuid,)
        )
        conn.commit()
        return cur.rowcount > 0

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> VolumeRecord:
        return VolumeRecord(
            fs_uuid=row["fs_uuid"],
            inited=bool(row["inited"]),
            snoozed=bool(row["snoozed"]),
            nickname=row["nickname"],
        )
