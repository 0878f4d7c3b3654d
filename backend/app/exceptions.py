"""Error taxonomy for file operations and the single reporting path."""

from __future__ import annotations

import logging
from typing import NoReturn

logger = logging.getLogger(__name__)


class StoreItError(Exception):
    """Base class for all StoreIt errors."""


class NotAuthenticated(StoreItError):
    """No current user could be resolved for the request."""


class UpstreamFailure(StoreItError):
    """A document store or blob store call failed."""


class DocumentNotFound(UpstreamFailure):
    """The addressed document or blob does not exist."""


class CompensationFailure(StoreItError):
    """Cleanup of an orphaned blob failed after a failed record write."""


class OperationFailed(StoreItError):
    """Generic failure surfaced to callers; the original error is the __cause__."""


def handle_error(error: BaseException, message: str) -> NoReturn:
    """Log a failed operation and re-raise it as OperationFailed."""
    logger.error("%s: %s", message, error, exc_info=error)
    raise OperationFailed(message) from error
