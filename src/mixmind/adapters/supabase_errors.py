"""Shared error translation for Supabase adapters."""

import logging
from typing import Any

from mixmind.domain.errors import PersistenceError

_logger = logging.getLogger(__name__)


def execute(query: Any, action: str) -> Any:
    """Run a Supabase query, translating client failures to PersistenceError."""
    try:
        return query.execute()
    except Exception as exc:
        _logger.warning("Supabase request failed: %s: %s", action, exc)
        raise PersistenceError(f"Failed to {action}", cause=exc) from exc
