"""Command line entry points, with the network call stubbed out."""
from __future__ import annotations

from typer.testing import CliRunner

from image_charts import ImageCharts, ImageChartsError
from image_charts.cli import app

runner = CliRunner()

PIE = ["-p", "cht=p3", "-p", "chd=t:60,40", "-p", "chs=700x300", "-p", "chl=Hello|World"]


def test_url_command():
    result = runner.invoke(app, ["url", *PIE])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == (
        "https://image-charts.com/chart?chd=t%3A60%2C40&chl=Hello%7CWorld&chs=700x300&cht=p3"
    )


def test_url_command_signs_with_env_secret():
    result = runner.invoke(app, ["url", *PIE, "-p", "icac=ACCOUNT"], env={"IMAGE_CHARTS_SECRET": "SECRET"})
    assert result.exit_code == 0, result.output
    assert result.output.strip().endswith(
        "&icac=ACCOUNT&ichm=73fb179a610701556670b257bd444dc88eff5e3726929d04eb71e76c1f05ebfb"
    )


def test_url_command_custom_port():
    result = runner.invoke(app, ["url", "-p", "cht=p", "--port", "8080"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "https://image-charts.com:8080/chart?cht=p"


def test_malformed_param_is_rejected():
    result = runner.invoke(app, ["url", "-p", "cht"])
    assert result.exit_code == 2


def test_reserved_param_is_rejected():
    result = runner.invoke(app, ["url", "-p", "ichm=abc"])
    assert result.exit_code == 2


def test_params_command_lists_sorted_names():
    result = runner.invoke(app, ["params", "-p", "cht=p", "-p", "chd=t:1", "-p", "icac=A", "--secret", "S"])
    assert result.exit_code == 0, result.output
    assert "signed" in result.output
    assert result.output.index("chd") < result.output.index("cht") < result.output.index("icac")


def test_download_command(monkeypatch, tmp_path, png_bytes):
    monkeypatch.setattr(ImageCharts, "to_buffer", lambda self: png_bytes)
    target = tmp_path / "chart.png"
    result = runner.invoke(app, ["download", str(target), *PIE])
    assert result.exit_code == 0, result.output
    assert target.read_bytes() == png_bytes
    assert "Saved" in result.output


def test_data_uri_command(monkeypatch):
    monkeypatch.setattr(ImageCharts, "to_buffer", lambda self: b"GIF89a")
    result = runner.invoke(app, ["data-uri", *PIE, "-p", "chan=1200"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "data:image/gif;base64,R0lGODlh"


def test_remote_error_exits_with_code_1(monkeypatch):
    def reject(self):
        raise ImageChartsError("chs is required", code="IC_MISSING", status_code=422)

    monkeypatch.setattr(ImageCharts, "to_buffer", reject)
    result = runner.invoke(app, ["data-uri", "-p", "cht=p"])
    assert result.exit_code == 1
    assert "chs is required" in result.output
    assert "422" in result.output
