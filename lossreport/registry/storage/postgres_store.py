from lossreport.database.connection import get_connection
from lossreport.registry.storage.base import BaseBlobStore


class PostgresBlobStore(BaseBlobStore):
    """Stores the blob as one row of the registry_blobs table, keyed by name."""

    def __init__(self, key: str) -> None:
        self._key = key

    def load(self) -> bytes | None:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "SELECT payload FROM registry_blobs WHERE key = %s",
                    (self._key,),
                )
                row = cur.fetchone()

        if row is None or row[0] is None:
            return None
        return bytes(row[0])

    def save(self, data: bytes) -> None:
        with get_connection() as conn:
            conn.execute(
                """
                INSERT INTO registry_blobs (key, payload, updated_at)
                VALUES (%s, %s, NOW())
                ON CONFLICT (key)
                DO UPDATE SET payload = EXCLUDED.payload, updated_at = NOW()
                """,
                (self._key, data),
            )
            conn.commit()
