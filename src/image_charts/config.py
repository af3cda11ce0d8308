from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any, Optional


@dataclass(frozen=True)
class ImageChartsConfig:
    """Immutable connection settings for the chart service.

    ``timeout_s`` is handed to httpx, which applies it to each phase of the
    request separately (connect, write, pool, and every read of the body).
    It bounds stalls, not the total duration: a server that keeps trickling
    bytes can hold a request open for longer than ``timeout_s``.
    """

    protocol: str = "https"
    host: str = "image-charts.com"
    port: int = 443
    pathname: str = "/chart"
    timeout_s: float = 5.0
    secret: Optional[str] = None
    user_agent: Optional[str] = None

    def replace(self, **changes: Any) -> "ImageChartsConfig":
        return replace(self, **changes)


DEFAULT_CONFIG = ImageChartsConfig()
