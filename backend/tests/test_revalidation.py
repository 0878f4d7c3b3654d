"""Tests for the frontend revalidation hook."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from app.services.revalidation import PathRevalidator


@pytest.mark.asyncio
async def test_no_hook_configured():
    assert await PathRevalidator().revalidate("/images") is False


@pytest.mark.asyncio
@patch("app.services.revalidation.httpx.AsyncClient")
async def test_posts_path_with_secret(mock_client_cls):
    mock_resp = MagicMock()
    mock_resp.raise_for_status = MagicMock()

    mock_http = AsyncMock()
    mock_http.post = AsyncMock(return_value=mock_resp)
    mock_http.__aenter__ = AsyncMock(return_value=mock_http)
    mock_http.__aexit__ = AsyncMock(return_value=False)
    mock_client_cls.return_value = mock_http

    revalidator = PathRevalidator(url="http://web/api/revalidate", secret="s3cret")
    assert await revalidator.revalidate("/documents") is True

    mock_http.post.assert_awaited_once_with(
        "http://web/api/revalidate",
        json={"path": "/documents"},
        headers={"x-revalidate-secret": "s3cret"},
    )


@pytest.mark.asyncio
@patch("app.services.revalidation.httpx.AsyncClient")
async def test_failure_is_not_raised(mock_client_cls):
    mock_http = AsyncMock()
    mock_http.post = AsyncMock(side_effect=httpx.ConnectError("down"))
    mock_http.__aenter__ = AsyncMock(return_value=mock_http)
    mock_http.__aexit__ = AsyncMock(return_value=False)
    mock_client_cls.return_value = mock_http

    revalidator = PathRevalidator(url="http://web/api/revalidate")
    assert await revalidator.revalidate("/") is False


@pytest.mark.asyncio
async def test_invalid_url_is_not_raised():
    assert await PathRevalidator(url="http://[::1").revalidate("/") is False
