import os
from typing import Optional
import psycopg


class Database:
    """Per-user key/value storage backing the bot's local state."""

    def __init__(self, database_url: Optional[str] = None):
        self.DATABASE_URL = database_url or os.getenv('DATABASE_URL')
        if not self.DATABASE_URL:
            raise ValueError("DATABASE_URL environment variable is not set")

    def get_connection(self) -> psycopg.Connection:
        return psycopg.connect(
            self.DATABASE_URL,
            connect_timeout=30,
            application_name='shopbot'
        )

    def ensure_schema(self) -> None:
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("""
                    CREATE TABLE IF NOT EXISTS local_storage (
                        user_id BIGINT NOT NULL,
                        key TEXT NOT NULL,
                        value TEXT NOT NULL,
                        updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),
                        PRIMARY KEY (user_id, key)
                    )
                """)
                conn.commit()

    def get_item(self, user_id: int, key: str) -> Optional[str]:
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "SELECT value FROM local_storage WHERE user_id = %s AND key = %s",
                    (user_id, key)
                )
                row = cur.fetchone()
                return row[0] if row else None

    def set_item(self, user_id: int, key: str, value: str) -> None:
        with self.get_connection() as conn:
            with conn.cursor() as cur:
                # Last write wins
                cur.execute(
                    """
                    INSERT INTO local_storage (user_id, key, value) VALUES (%s, %s, %s)
                    ON CONFLICT (user_id, key) DO UPDATE SET value = EXCLUDED.value, updated_at = now()
                    """,
                    (user_id, key, value)
                )
                conn.commit()

