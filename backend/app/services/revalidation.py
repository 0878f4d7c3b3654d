"""Page-cache invalidation — tells the web frontend to refresh a path."""

from __future__ import annotations

import logging

import httpx

from app.config import Settings

logger = logging.getLogger(__name__)


class PathRevalidator:
    """POSTs ``{"path": ...}`` to the frontend's revalidate hook.

    Has no effect on data; failures are logged and never raised.
    """

    def __init__(
        self,
        url: str = "",
        secret: str = "",
        timeout: float = 5.0,
    ):
        self._url = url
        self._secret = secret
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> PathRevalidator:
        return cls(
            url=settings.revalidate_url,
            secret=settings.revalidate_secret,
            timeout=settings.revalidate_timeout_seconds,
        )

    async def revalidate(self, path: str) -> bool:
        """Returns True when the frontend acknowledged the refresh."""
        if not self._url:
            logger.debug("Revalidate %s (no hook configured)", path)
            return False

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.post(
                    self._url,
                    json={"path": path},
                    headers={"x-revalidate-secret": self._secret},
                )
            resp.raise_for_status()
            return True
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("Revalidate %s failed: %s", path, e)
            return False
