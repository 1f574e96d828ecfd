from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, in_clause
from .model import Image
from .repository import ImageRepository


class MySQLImageRepository(ImageRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, image_id: int) -> Optional[Image]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT image_id, name, description, data, content_type, created_at FROM images WHERE image_id=%s",
                (image_id,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return Image(
                image_id=int(row["image_id"]),
                name=row["name"],
                description=row.get("description"),
                data=bytes(row["data"]),
                content_type=row["content_type"],
                created_at=row.get("created_at"),
            )

    def create_image(self, *, name: str, description: Optional[str], data: bytes, content_type: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO images(name, description, data, content_type) VALUES(%s,%s,%s,%s)",
                (name, description, data, content_type),
            )
            return int(cur.lastrowid)

    def delete_by_id(self, image_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM images WHERE image_id=%s", (image_id,))
            return cur.rowcount > 0

    def delete_many(self, image_ids: Sequence[int]) -> int:
        if not image_ids:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM images WHERE image_id IN ({in_clause(image_ids)})", tuple(image_ids))
            return int(cur.rowcount)
