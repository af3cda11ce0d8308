from __future__ import annotations
import asyncio
import base64
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import httpx

from ._version import __version__
from .config import DEFAULT_CONFIG, ImageChartsConfig
from .errors import ImageChartsError
from .http_client import AsyncHttpClient, HttpClient
from .models import ImageFormat, ParamRow
from .params import ACCOUNT_ID_KEY, ANIMATION_KEY, ChartParams
from .url import build_url, canonical_rows

log = logging.getLogger("image_charts.chart")

CLIENT_NAME = "python-image_charts"

PathLike = Union[str, "os.PathLike[str]"]


class ImageCharts:
    """
    Fluent request builder for the Image-Charts API.

    Every parameter setter returns a new ``ImageCharts``; the receiver is left
    untouched, so a shared base chart can be branched safely::

        base = ImageCharts().cht("p").chs("400x300")
        pie = base.chd("t:60,40").to_url()
        other = base.chd("t:10,90").to_url()

    Terminal operations: ``to_url`` (no I/O), ``to_buffer``, ``to_file`` and
    ``to_data_uri`` plus their ``*_async`` variants.
    """

    def __init__(
        self,
        config: Optional[ImageChartsConfig] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
        params: Optional[ChartParams] = None,
    ) -> None:
        self._config = config or DEFAULT_CONFIG
        self._transport = transport
        self._async_transport = async_transport
        self._params = params or ChartParams()

    @classmethod
    def with_secret(cls, secret: str, **kwargs: Any) -> "ImageCharts":
        """Enterprise instance: URLs carrying ``icac`` get signed with ``secret``."""
        return cls(DEFAULT_CONFIG.replace(secret=secret), **kwargs)

    @classmethod
    def builder(cls) -> "ImageChartsBuilder":
        return ImageChartsBuilder()

    @property
    def config(self) -> ImageChartsConfig:
        return self._config

    @property
    def params(self) -> ChartParams:
        return self._params

    def set(self, name: str, value: str) -> "ImageCharts":
        """Set any query parameter, including ones without a dedicated setter."""
        return ImageCharts(
            self._config,
            transport=self._transport,
            async_transport=self._async_transport,
            params=self._params.set(name, value),
        )

    def __repr__(self) -> str:
        return f"ImageCharts(host={self._config.host!r}, params={self._params!r})"

    # ------- chart parameters -------

    def cht(self, value: str) -> "ImageCharts":
        """Chart type: bvg grouped bars, bvs stacked bars, lc line, ls sparkline, p pie, gv graphviz.

        ``p3`` is rendered in 2D. Append ``:nda`` to a line chart type to hide the default axes.
        """
        return self.set("cht", value)

    def chd(self, value: str) -> "ImageCharts":
        """Chart data, e.g. ``a:-100,200.5,75.55,110`` or ``t:10,20,30|15,25,35``."""
        return self.set("chd", value)

    def chds(self, value: str) -> "ImageCharts":
        """Data scaling: ``a`` for automatic, or ``<min>,<max>`` pairs per series."""
        return self.set("chds", value)

    def choe(self, value: str) -> "ImageCharts":
        """QR code data encoding. ``UTF-8`` is the only supported value."""
        return self.set("choe", value)

    def chld(self, value: str) -> "ImageCharts":
        """QR code error correction level and optional margin (default ``L|4``)."""
        return self.set("chld", value)

    def chxr(self, value: str) -> "ImageCharts":
        """Axis range: ``<axis_index>,<start>,<end>[,<step>]``.

        Only the axis labels are affected, use ``chds`` to scale the data.
        """
        return self.set("chxr", value)

    def chof(self, value: str) -> "ImageCharts":
        """Output format suffix (``.png``, ``.svg``, ``.gif``) for clients that sniff the URL extension."""
        return self.set("chof", value)

    def chs(self, value: str) -> "ImageCharts":
        """Chart size as ``<width>x<height>``; at most 999 pixels per side."""
        return self.set("chs", value)

    def chdl(self, value: str) -> "ImageCharts":
        """Legend entries, ``<series_1_label>|...|<series_n_label>``."""
        return self.set("chdl", value)

    def chdls(self, value: str) -> "ImageCharts":
        """Legend text color and font size, ``<color>,<size>``."""
        return self.set("chdls", value)

    def chg(self, value: str) -> "ImageCharts":
        """Solid or dotted grid lines."""
        return self.set("chg", value)

    def chco(self, value: str) -> "ImageCharts":
        """Series colors, comma separated ``RRGGBB[AA]`` values."""
        return self.set("chco", value)

    def chtt(self, value: str) -> "ImageCharts":
        """Chart title."""
        return self.set("chtt", value)

    def chts(self, value: str) -> "ImageCharts":
        """Title style, ``<color>,<font_size>[,<alignment>,<font_family>,<font_style>]``."""
        return self.set("chts", value)

    def chxt(self, value: str) -> "ImageCharts":
        """Visible axes among ``x``, ``y``, ``t`` and ``r``, e.g. ``x,y``. Order matters."""
        return self.set("chxt", value)

    def chxl(self, value: str) -> "ImageCharts":
        """Custom axis labels, ``<axis_index>:|<label_1>|...|<label_n>``."""
        return self.set("chxl", value)

    def chxs(self, value: str) -> "ImageCharts":
        """Axis label styles, e.g. ``1,0000DD``."""
        return self.set("chxs", value)

    def chm(self, value: str) -> "ImageCharts":
        """Markers: line fills (``B``), line markers (``D``) or text and data value markers (``N``)."""
        return self.set("chm", value)

    def chls(self, value: str) -> "ImageCharts":
        """Line thickness and dash style."""
        return self.set("chls", value)

    def chl(self, value: str) -> "ImageCharts":
        """Data labels; overrides ``chdl`` when both are set."""
        return self.set("chl", value)

    def chlps(self, value: str) -> "ImageCharts":
        return self.set("chlps", value)

    def chma(self, value: str) -> "ImageCharts":
        """Chart margins, e.g. ``30,30,30,30``."""
        return self.set("chma", value)

    def chdlp(self, value: str) -> "ImageCharts":
        """Legend position and entry order (default ``r``)."""
        return self.set("chdlp", value)

    def chf(self, value: str) -> "ImageCharts":
        """Background fills, e.g. ``b0,lg,0,f44336,0.3,03a9f4,0.8``."""
        return self.set("chf", value)

    def chbr(self, value: str) -> "ImageCharts":
        """Bar corner radius."""
        return self.set("chbr", value)

    def chan(self, value: str) -> "ImageCharts":
        """Animation settings. Setting it switches the output to GIF."""
        return self.set("chan", value)

    def chli(self, value: str) -> "ImageCharts":
        """Doughnut chart inside label."""
        return self.set("chli", value)

    def icac(self, value: str) -> "ImageCharts":
        """Enterprise account id. Combined with a configured secret, the URL gets signed."""
        return self.set("icac", value)

    def icff(self, value: str) -> "ImageCharts":
        """Default font family, any Google Font name."""
        return self.set("icff", value)

    def icfs(self, value: str) -> "ImageCharts":
        """Default font style for all text."""
        return self.set("icfs", value)

    def iclocale(self, value: str) -> "ImageCharts":
        """Localization (ISO 639-1)."""
        return self.set("iclocale", value)

    def icretina(self, value: str) -> "ImageCharts":
        """Retina mode, ``1`` to enable."""
        return self.set("icretina", value)

    def icqrb(self, value: str) -> "ImageCharts":
        """QR code background color (default ``FFFFFF``)."""
        return self.set("icqrb", value)

    def icqrf(self, value: str) -> "ImageCharts":
        """QR code foreground color (default ``000000``)."""
        return self.set("icqrf", value)

    # ------- derived values -------

    def to_url(self) -> str:
        """Full chart URL, signed when an account id and a secret are both present."""
        return build_url(self._params, self._config)

    def rows(self) -> List[ParamRow]:
        return canonical_rows(self._params)

    @property
    def image_format(self) -> ImageFormat:
        return ImageFormat.GIF if ANIMATION_KEY in self._params else ImageFormat.PNG

    @property
    def mime_type(self) -> str:
        return self.image_format.mime_type

    @property
    def file_format(self) -> str:
        return self.image_format.value

    @property
    def user_agent(self) -> str:
        if self._config.user_agent:
            return self._config.user_agent
        account_id = self._params.get(ACCOUNT_ID_KEY)
        suffix = f" ({account_id})" if account_id is not None else ""
        return f"{CLIENT_NAME}/{__version__}{suffix}"

    def _headers(self) -> Dict[str, str]:
        return {"User-Agent": self.user_agent}

    def _data_uri(self, buffer: bytes) -> str:
        encoded = base64.b64encode(buffer).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"

    # ------- blocking outputs -------

    def to_buffer(self) -> bytes:
        """Fetch the chart image. Raises :class:`ImageChartsError` on any failure."""
        http = HttpClient(self._config, transport=self._transport)
        try:
            return http.get_bytes(self.to_url(), self._headers())
        finally:
            http.close()

    def to_file(self, path: PathLike) -> None:
        buffer = self.to_buffer()
        _write_file(path, buffer)

    def to_data_uri(self) -> str:
        return self._data_uri(self.to_buffer())

    # ------- asyncio outputs -------

    async def to_buffer_async(self) -> bytes:
        http = AsyncHttpClient(self._config, transport=self._async_transport)
        try:
            return await http.get_bytes(self.to_url(), self._headers())
        finally:
            await http.aclose()

    async def to_file_async(self, path: PathLike) -> None:
        buffer = await self.to_buffer_async()
        await asyncio.to_thread(_write_file, path, buffer)

    async def to_data_uri_async(self) -> str:
        return self._data_uri(await self.to_buffer_async())


def _write_file(path: PathLike, buffer: bytes) -> None:
    try:
        Path(path).write_bytes(buffer)
    except OSError as e:
        raise ImageChartsError(str(e)) from e
    log.debug("Wrote %d bytes to %s", len(buffer), path)


class ImageChartsBuilder:
    """Step-by-step construction of a configured :class:`ImageCharts`."""

    def __init__(self) -> None:
        self._changes: Dict[str, Any] = {}
        self._transport: Optional[httpx.BaseTransport] = None
        self._async_transport: Optional[httpx.AsyncBaseTransport] = None

    def protocol(self, protocol: str) -> "ImageChartsBuilder":
        self._changes["protocol"] = protocol
        return self

    def host(self, host: str) -> "ImageChartsBuilder":
        self._changes["host"] = host
        return self

    def port(self, port: int) -> "ImageChartsBuilder":
        self._changes["port"] = port
        return self

    def pathname(self, pathname: str) -> "ImageChartsBuilder":
        self._changes["pathname"] = pathname
        return self

    def timeout(self, seconds: float) -> "ImageChartsBuilder":
        self._changes["timeout_s"] = seconds
        return self

    def secret(self, secret: str) -> "ImageChartsBuilder":
        self._changes["secret"] = secret
        return self

    def user_agent(self, user_agent: str) -> "ImageChartsBuilder":
        self._changes["user_agent"] = user_agent
        return self

    def transport(self, transport: httpx.BaseTransport) -> "ImageChartsBuilder":
        """httpx transport for the blocking outputs."""
        self._transport = transport
        return self

    def async_transport(self, transport: httpx.AsyncBaseTransport) -> "ImageChartsBuilder":
        """httpx transport for the ``*_async`` outputs."""
        self._async_transport = transport
        return self

    def build(self) -> ImageCharts:
        return ImageCharts(
            DEFAULT_CONFIG.replace(**self._changes),
            transport=self._transport,
            async_transport=self._async_transport,
        )
