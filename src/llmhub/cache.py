"""Shared LLM response cache.

Entries are keyed by a content fingerprint and tagged with the id of the
request that produced them, so a finished request can release its entries
without touching anyone else's.

Storage is SQLite through SQLAlchemy: a private in-memory database by
default, or a file that several providers may share on purpose.

Design follows Function Core / Imperative Shell:
- Pure functions: fingerprint, get_cache_path
- Imperative shell: LLMCache
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import threading
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

import sqlalchemy as sa
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy import Engine

    from llmhub.models import ChatCompletionOptions

LLMHUB_CACHE_PATH_ENV = "LLMHUB_CACHE_PATH"


# ---------------------------------------------------------------------------
# SQLAlchemy models
# ---------------------------------------------------------------------------


class Base(DeclarativeBase):
    pass


class CacheEntry(Base):
    __tablename__ = "llm_cache_entries"
    __table_args__ = (sa.UniqueConstraint("fingerprint", "request_id"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    fingerprint: Mapped[str] = mapped_column(sa.String(64), nullable=False, index=True)
    request_id: Mapped[str] = mapped_column(sa.String, nullable=False, index=True)
    data_json: Mapped[str] = mapped_column(sa.Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime,
        default=lambda: datetime.now(UTC),
    )


# ---------------------------------------------------------------------------
# Pure functions
# ---------------------------------------------------------------------------


def fingerprint(
    model_name: str,
    options: ChatCompletionOptions,
    scope: Mapping[str, Any] | None = None,
) -> str:
    """Compute the cache key for a request to *model_name*.

    SHA-256 over canonical JSON, so logically equal requests collide.
    *scope* holds client settings that change the answer (for example the
    ``api_base`` of a self-hosted model); it is left out of the key when empty.
    """
    payload: dict[str, Any] = {"model": model_name, "options": options.model_dump(mode="json")}
    if scope:
        payload["scope"] = dict(scope)
    raw = json.dumps(payload, sort_keys=True, default=str)
    return hashlib.sha256(raw.encode()).hexdigest()


def get_cache_path() -> Path | None:
    """Return the cache file named by ``LLMHUB_CACHE_PATH``.

    Persistence is opt-in. With the variable unset or blank there is no
    path, and every provider keeps a private in-memory cache.
    """
    configured = os.environ.get(LLMHUB_CACHE_PATH_ENV, "").strip()
    return Path(configured).expanduser() if configured else None


# ---------------------------------------------------------------------------
# Imperative shell
# ---------------------------------------------------------------------------


def _create_engine(path: Path | None) -> Engine:
    if path is None:
        # One shared connection, otherwise each checkout sees an empty database.
        return sa.create_engine(
            "sqlite://",
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )

    path.parent.mkdir(parents=True, exist_ok=True)
    engine = sa.create_engine(
        f"sqlite:///{path}",
        connect_args={"check_same_thread": False},
    )

    @sa.event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection: object, _connection_record: object) -> None:
        cursor = dbapi_connection.cursor()  # type: ignore[union-attr]
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine


class LLMCache:
    """Response cache shared by every client of one provider.

    All operations hold a re-entrant lock: the in-memory database lives on a
    single connection that must not be used by two threads at once.
    """

    def __init__(self, logger: logging.Logger, *, path: Path | None = None) -> None:
        self.logger = logger
        self.path = path
        self._lock = threading.RLock()
        self._engine = _create_engine(path)
        Base.metadata.create_all(self._engine)

    fingerprint = staticmethod(fingerprint)

    def get(self, key: str) -> dict[str, Any] | None:
        """Return the most recently stored data for *key*, or ``None``."""
        t = CacheEntry.__table__
        stmt = (
            sa.select(t.c.data_json, t.c.request_id)
            .where(t.c.fingerprint == key)
            .order_by(t.c.id.desc())
            .limit(1)
        )
        with self._lock, self._engine.connect() as conn:
            row = conn.execute(stmt).first()

        if row is None:
            self.logger.debug("Cache miss for %s", key[:16])
            return None

        self.logger.debug("Cache hit for %s (request %s)", key[:16], row.request_id)
        return json.loads(row.data_json)

    def set(self, key: str, data: dict[str, Any], request_id: str) -> None:
        """Store *data* under *key*, tagged with *request_id*.

        Replaces an earlier entry only when both key and request id match.
        """
        t = CacheEntry.__table__
        data_json = json.dumps(data, default=str)
        with self._lock, self._engine.begin() as conn:
            conn.execute(
                sa.delete(t).where(t.c.fingerprint == key, t.c.request_id == request_id)
            )
            conn.execute(
                sa.insert(t).values(fingerprint=key, request_id=request_id, data_json=data_json)
            )

    def delete_cache_for_request_id(self, request_id: str) -> int:
        """Delete every entry tagged with *request_id*. Returns the row count."""
        t = CacheEntry.__table__
        with self._lock, self._engine.begin() as conn:
            result = conn.execute(sa.delete(t).where(t.c.request_id == request_id))
            deleted = result.rowcount or 0
        return deleted

    def count(self, request_id: str | None = None) -> int:
        """Number of stored entries, optionally for one request id."""
        t = CacheEntry.__table__
        stmt = sa.select(sa.func.count()).select_from(t)
        if request_id is not None:
            stmt = stmt.where(t.c.request_id == request_id)
        with self._lock, self._engine.connect() as conn:
            return conn.execute(stmt).scalar_one()

    def close(self) -> None:
        """Release the database connections."""
        with self._lock:
            self._engine.dispose()
