import sqlite3
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from kewpa_search.core.search.models import CANONICAL_KIND_ORDER, EntityKind

logger = logging.getLogger(__name__)

TABLES: Dict[EntityKind, str] = {
    EntityKind.ASSET: "assets",
    EntityKind.INVENTORY: "inventory_items",
    EntityKind.SUPPLIER: "suppliers",
    EntityKind.MOVEMENT: "asset_movements",
    EntityKind.INSPECTION: "asset_inspections",
    EntityKind.MAINTENANCE: "asset_maintenance_records",
}


class RecordsRepo:
    """
    Read side of the KEW.PA/KEW.PS tables: one snapshot per entity kind,
    returned as plain row dicts for the quick search collector.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self):
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def fetch_rows(self, kind) -> Optional[List[Dict[str, Any]]]:
        """
        Returns all rows of the kind ordered by id, or None if the table can't
        be read (the kind is then treated as absent).
        """
        kind = EntityKind.parse(kind)
        table = TABLES[kind]
        try:
            conn = self._get_conn()
            try:
                rows = conn.execute(f"SELECT * FROM {table} ORDER BY id").fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.warning(f"Failed to load {kind.value} snapshot from {table}: {e}")
            return None
        return [dict(r) for r in rows]

    def load_collections(self, kinds: Optional[Iterable[EntityKind]] = None) -> Dict[EntityKind, Optional[List[Dict[str, Any]]]]:
        wanted = [EntityKind.parse(k) for k in kinds] if kinds is not None else list(CANONICAL_KIND_ORDER)
        return {kind: self.fetch_rows(kind) for kind in wanted}

    def count(self, kind) -> Optional[int]:
        kind = EntityKind.parse(kind)
        try:
            conn = self._get_conn()
            try:
                return conn.execute(f"SELECT COUNT(*) FROM {TABLES[kind]}").fetchone()[0]
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.warning(f"Failed to count {kind.value}: {e}")
            return None

    def _columns(self, conn, table: str) -> List[str]:
        return [r["name"] for r in conn.execute(f"PRAGMA table_info({table})").fetchall()]

    def insert_rows(self, kind, rows: Iterable[Mapping[str, Any]]) -> int:
        """
        Inserts rows (column -> value) in one transaction. Keys that are not
        columns of the kind's table raise ValueError before anything is written.
        Returns the number of rows inserted.
        """
        kind = EntityKind.parse(kind)
        table = TABLES[kind]
        inserted = 0
        conn = self._get_conn()
        try:
            known = set(self._columns(conn, table))
            with conn:
                for row in rows:
                    columns = list(row.keys())
                    if not columns:
                        continue
                    unknown = [c for c in columns if c not in known]
                    if unknown:
                        raise ValueError(f"Unknown {table} column(s): {', '.join(map(str, unknown))}")
                    column_sql = ", ".join(f'"{c}"' for c in columns)
                    placeholders = ", ".join("?" for _ in columns)
                    conn.execute(
                        f"INSERT INTO {table} ({column_sql}) VALUES ({placeholders})",
                        [row[c] for c in columns],
                    )
                    inserted += 1
        finally:
            conn.close()
        logger.info(f"Inserted {inserted} {kind.value} rows into {table}")
        return inserted
