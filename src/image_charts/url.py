from __future__ import annotations
import hashlib
import hmac
from typing import List
from urllib.parse import quote

from .config import ImageChartsConfig
from .models import ParamRow
from .params import ACCOUNT_ID_KEY, SIGNATURE_KEY, ChartParams

DEFAULT_PORTS = {("https", 443), ("http", 80)}


def encode_value(value: str) -> str:
    """Percent-encode everything except ASCII alphanumerics and ``-_.~``."""
    return quote(value, safe="")


def canonical_rows(params: ChartParams) -> List[ParamRow]:
    return [ParamRow(name=k, value=v, encoded=encode_value(v)) for k, v in params.sorted_items()]


def canonical_query(params: ChartParams) -> str:
    """Sorted, encoded ``name=value`` pairs joined with ``&`` (no signature)."""
    return "&".join(f"{r.name}={r.encoded}" for r in canonical_rows(params))


def sign(data: str, secret: str) -> str:
    """Lowercase hex HMAC-SHA256 of ``data`` keyed by ``secret``."""
    return hmac.new(secret.encode("utf-8"), data.encode("utf-8"), hashlib.sha256).hexdigest()


def should_sign(params: ChartParams, secret: str | None) -> bool:
    return ACCOUNT_ID_KEY in params and bool(secret)


def port_segment(protocol: str, port: int) -> str:
    """Return ``:port`` unless the port is the protocol's default."""
    if (protocol, port) in DEFAULT_PORTS:
        return ""
    return f":{port}"


def build_url(params: ChartParams, config: ImageChartsConfig) -> str:
    query = canonical_query(params)
    if should_sign(params, config.secret):
        query = f"{query}&{SIGNATURE_KEY}={sign(query, config.secret)}"
    port = port_segment(config.protocol, config.port)
    return f"{config.protocol}://{config.host}{port}{config.pathname}?{query}"
