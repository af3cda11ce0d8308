from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Tuple

import typer
from rich.console import Console

from .chart import ImageCharts
from .config import DEFAULT_CONFIG, ImageChartsConfig
from .errors import ImageChartsError
from .reporter import Reporter
from .url import should_sign

app = typer.Typer(add_completion=False, no_args_is_help=True)

PARAM_HELP = "Chart parameter as name=value, repeatable (e.g. -p cht=p -p chd=t:60,40)."


def _parse_params(raw: List[str]) -> List[Tuple[str, str]]:
    pairs = []
    for item in raw:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise typer.BadParameter(f"expected name=value, got {item!r}", param_hint="--param")
        pairs.append((name, value))
    return pairs


def _config(
    protocol: str,
    host: str,
    port: int,
    pathname: str,
    timeout: float,
    secret: str | None,
    user_agent: str | None,
) -> ImageChartsConfig:
    return ImageChartsConfig(
        protocol=protocol,
        host=host,
        port=port,
        pathname=pathname,
        timeout_s=timeout,
        secret=secret or None,
        user_agent=user_agent or None,
    )


def _chart(config: ImageChartsConfig, params: List[str]) -> ImageCharts:
    chart = ImageCharts(config)
    for name, value in _parse_params(params):
        try:
            chart = chart.set(name, value)
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="--param")
    return chart


def _fail(reporter: Reporter, err: ImageChartsError):
    reporter.error(err)
    raise typer.Exit(code=1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests to stderr."),
) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )


@app.command("url")
def url(
    param: List[str] = typer.Option([], "--param", "-p", help=PARAM_HELP),
    protocol: str = typer.Option("https", "--protocol"),
    host: str = typer.Option("image-charts.com", "--host"),
    port: int = typer.Option(443, "--port", min=0, max=65535),
    pathname: str = typer.Option("/chart", "--pathname"),
    timeout: float = typer.Option(5.0, "--timeout", help="Request timeout in seconds."),
    secret: str | None = typer.Option(None, "--secret", envvar="IMAGE_CHARTS_SECRET", help="Enterprise signing secret."),
    user_agent: str | None = typer.Option(None, "--user-agent", envvar="IMAGE_CHARTS_USER_AGENT"),
):
    """Print the chart URL, signed when --secret and an icac parameter are given."""
    reporter = Reporter(Console())
    chart = _chart(_config(protocol, host, port, pathname, timeout, secret, user_agent), param)
    reporter.plain(chart.to_url())


@app.command("params")
def params(
    param: List[str] = typer.Option([], "--param", "-p", help=PARAM_HELP),
    secret: str | None = typer.Option(None, "--secret", envvar="IMAGE_CHARTS_SECRET", help="Enterprise signing secret."),
):
    """Show the parameters in the order they are serialized."""
    reporter = Reporter(Console())
    chart = _chart(DEFAULT_CONFIG.replace(secret=secret or None), param)
    reporter.params(chart.rows(), signed=should_sign(chart.params, chart.config.secret))


@app.command("download")
def download(
    path: Path = typer.Argument(..., help="Destination file"),
    param: List[str] = typer.Option([], "--param", "-p", help=PARAM_HELP),
    protocol: str = typer.Option("https", "--protocol"),
    host: str = typer.Option("image-charts.com", "--host"),
    port: int = typer.Option(443, "--port", min=0, max=65535),
    pathname: str = typer.Option("/chart", "--pathname"),
    timeout: float = typer.Option(5.0, "--timeout", help="Request timeout in seconds."),
    secret: str | None = typer.Option(None, "--secret", envvar="IMAGE_CHARTS_SECRET", help="Enterprise signing secret."),
    user_agent: str | None = typer.Option(None, "--user-agent", envvar="IMAGE_CHARTS_USER_AGENT"),
):
    """Fetch the chart and write it to PATH."""
    reporter = Reporter(Console())
    chart = _chart(_config(protocol, host, port, pathname, timeout, secret, user_agent), param)
    try:
        chart.to_file(path)
    except ImageChartsError as e:
        _fail(reporter, e)
    reporter.saved(str(path), path.stat().st_size, chart.mime_type)


@app.command("data-uri")
def data_uri(
    param: List[str] = typer.Option([], "--param", "-p", help=PARAM_HELP),
    protocol: str = typer.Option("https", "--protocol"),
    host: str = typer.Option("image-charts.com", "--host"),
    port: int = typer.Option(443, "--port", min=0, max=65535),
    pathname: str = typer.Option("/chart", "--pathname"),
    timeout: float = typer.Option(5.0, "--timeout", help="Request timeout in seconds."),
    secret: str | None = typer.Option(None, "--secret", envvar="IMAGE_CHARTS_SECRET", help="Enterprise signing secret."),
    user_agent: str | None = typer.Option(None, "--user-agent", envvar="IMAGE_CHARTS_USER_AGENT"),
):
    """Fetch the chart and print it as a base64 data URI."""
    reporter = Reporter(Console())
    chart = _chart(_config(protocol, host, port, pathname, timeout, secret, user_agent), param)
    try:
        uri = chart.to_data_uri()
    except ImageChartsError as e:
        _fail(reporter, e)
    reporter.plain(uri)


if __name__ == "__main__":
    app()
