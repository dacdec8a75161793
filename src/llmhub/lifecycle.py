"""Ownership of the shared cache for one provider session.

Cleanup is best-effort: it never raises, and on a session without caching it
does nothing at all.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from llmhub.cache import LLMCache
from llmhub.tracing import CACHE_CLEANUP_SPAN, cache_cleanup_attributes, get_tracer

if TYPE_CHECKING:
    import logging
    from pathlib import Path


class CacheLifecycleManager:
    """Creates the shared cache (if any) and releases it per request."""

    def __init__(self, logger: logging.Logger, cache: LLMCache | None) -> None:
        self.logger = logger
        self.cache = cache

    @classmethod
    def create(
        cls,
        logger: logging.Logger,
        enable_caching: bool,
        *,
        cache_path: Path | None = None,
    ) -> CacheLifecycleManager:
        """Build a manager; the cache exists only when *enable_caching* is set."""
        cache = LLMCache(logger, path=cache_path) if enable_caching else None
        return cls(logger, cache)

    @property
    def enabled(self) -> bool:
        return self.cache is not None

    def cleanup(self, request_id: str) -> None:
        """Remove every cache entry produced by *request_id*."""
        if self.cache is None:
            return

        self.logger.info("cleaning up cache", extra={"request_id": request_id})
        with get_tracer().start_as_current_span(CACHE_CLEANUP_SPAN) as span:
            try:
                deleted = self.cache.delete_cache_for_request_id(request_id)
            except SQLAlchemyError:
                self.logger.warning(
                    "Failed to clean cache for request %s", request_id, exc_info=True
                )
                deleted = 0
            span.set_attributes(cache_cleanup_attributes(request_id, deleted))

        self.logger.debug("Removed %d cache entries for request %s", deleted, request_id)

    def close(self) -> None:
        if self.cache is not None:
            self.cache.close()
