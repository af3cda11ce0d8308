from __future__ import annotations
import logging
from typing import Mapping, Optional

import httpx
from pydantic import ValidationError

from .config import ImageChartsConfig
from .errors import ImageChartsError
from .models import VALIDATION_MESSAGES

log = logging.getLogger("image_charts.http")

ERROR_CODE_HEADER = "x-ic-error-code"
ERROR_VALIDATION_HEADER = "x-ic-error-validation"


def parse_error_response(
    status: int,
    error_code: Optional[str],
    validation_header: Optional[str],
) -> ImageChartsError:
    """Build the error for a rejected request.

    Validation messages win over the error code, which wins over the bare
    HTTP status. A validation header that is not a JSON list of
    ``{"message": ...}`` objects is ignored.
    """
    message: Optional[str] = None
    if validation_header:
        try:
            entries = VALIDATION_MESSAGES.validate_json(validation_header)
            message = "\n".join(e.message for e in entries)
        except ValidationError:
            log.debug("Ignoring malformed %s header: %r", ERROR_VALIDATION_HEADER, validation_header)
    if message is None:
        message = error_code or f"HTTP {status}"
    return ImageChartsError(message, code=error_code, status_code=status)


def _check_response(resp: httpx.Response) -> bytes:
    if 200 <= resp.status_code < 300:
        return resp.content
    err = parse_error_response(
        resp.status_code,
        resp.headers.get(ERROR_CODE_HEADER),
        resp.headers.get(ERROR_VALIDATION_HEADER),
    )
    log.warning("Chart request rejected: HTTP %s (%s)", resp.status_code, err.message)
    raise err


def _transport_error(e: httpx.HTTPError) -> ImageChartsError:
    # get() never raises HTTPStatusError, so no response status is available here
    log.warning("Chart request failed: %s", e)
    return ImageChartsError(str(e) or type(e).__name__)


class HttpClient:
    """Blocking client used to fetch a single chart image."""

    def __init__(
        self,
        config: ImageChartsConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config
        self._client = httpx.Client(
            timeout=config.timeout_s,
            follow_redirects=True,
            transport=transport,
        )

    def get_bytes(self, url: str, headers: Mapping[str, str]) -> bytes:
        log.debug("GET %s (timeout %ss)", url, self._config.timeout_s)
        try:
            resp = self._client.get(url, headers=dict(headers))
        except httpx.HTTPError as e:
            raise _transport_error(e) from e
        return _check_response(resp)

    def close(self) -> None:
        self._client.close()


class AsyncHttpClient:
    """asyncio counterpart of :class:`HttpClient`."""

    def __init__(
        self,
        config: ImageChartsConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config
        self._client = httpx.AsyncClient(
            timeout=config.timeout_s,
            follow_redirects=True,
            transport=transport,
        )

    async def get_bytes(self, url: str, headers: Mapping[str, str]) -> bytes:
        log.debug("GET %s (timeout %ss)", url, self._config.timeout_s)
        try:
            resp = await self._client.get(url, headers=dict(headers))
        except httpx.HTTPError as e:
            raise _transport_error(e) from e
        return _check_response(resp)

    async def aclose(self) -> None:
        await self._client.aclose()
