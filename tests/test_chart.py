"""Fluent builder, configuration and derived request values."""
from __future__ import annotations

import pytest

from image_charts import DEFAULT_CONFIG, ImageCharts, ImageChartsConfig, __version__
from image_charts.models import ImageFormat


def test_default_config():
    config = ImageChartsConfig()
    assert config == DEFAULT_CONFIG
    assert config.protocol == "https"
    assert config.host == "image-charts.com"
    assert config.port == 443
    assert config.pathname == "/chart"
    assert config.timeout_s == 5.0
    assert config.secret is None
    assert config.user_agent is None


def test_config_is_frozen():
    with pytest.raises(AttributeError):
        DEFAULT_CONFIG.host = "example.com"  # type: ignore[misc]


def test_to_url_basic():
    url = ImageCharts().cht("p").chd("t:1,2,3").to_url()
    assert url == "https://image-charts.com/chart?chd=t%3A1%2C2%2C3&cht=p"


def test_custom_port_in_url():
    url = ImageCharts(DEFAULT_CONFIG.replace(port=8080)).cht("p").to_url()
    assert url.startswith("https://image-charts.com:8080/chart?")


def test_with_secret_signs_when_account_present():
    chart = ImageCharts.with_secret("plop").cht("p").chd("t:1,2,3").chs("100x100")
    assert "ichm=" not in chart.to_url()
    assert "ichm=" in chart.icac("test_fixture").to_url()


def test_builder_pattern():
    chart = ImageCharts.builder().secret("test-secret").timeout(10).host("custom.host.com").build()
    assert chart.config.host == "custom.host.com"
    assert chart.config.timeout_s == 10
    assert chart.config.secret == "test-secret"
    assert chart.config.port == 443


def test_builder_full_endpoint():
    chart = (
        ImageCharts.builder()
        .protocol("http")
        .host("localhost")
        .port(80)
        .pathname("/c")
        .user_agent("tests/1.0")
        .build()
        .cht("p")
    )
    assert chart.to_url() == "http://localhost/c?cht=p"
    assert chart.user_agent == "tests/1.0"


def test_fluent_branches_are_independent():
    base = ImageCharts().cht("bvg").chs("300x200")
    a = base.chd("a:10,20,30").chxt("x,y")
    b = base.chd("a:1,2")
    assert "chxt" not in b.params
    assert "chd=a%3A1%2C2" in b.to_url()
    assert "chd=a%3A10%2C20%2C30" in a.to_url()
    assert "chd" not in base.params


@pytest.mark.parametrize(
    "setter",
    [
        "cht", "chd", "chds", "choe", "chld", "chxr", "chof", "chs", "chdl", "chdls", "chg",
        "chco", "chtt", "chts", "chxt", "chxl", "chxs", "chm", "chls", "chl", "chlps", "chma",
        "chdlp", "chf", "chbr", "chan", "chli", "icac", "icff", "icfs", "iclocale",
        "icretina", "icqrb", "icqrf",
    ],
)
def test_named_setter_sets_its_own_key(setter):
    chart = getattr(ImageCharts(), setter)("v")
    assert chart.params.as_dict() == {setter: "v"}


def test_no_setter_for_signature():
    assert not hasattr(ImageCharts(), "ichm")
    with pytest.raises(ValueError):
        ImageCharts().set("ichm", "x")


def test_generic_set_accepts_unknown_keys():
    assert ImageCharts().set("zz", "1").set("aa", "2").to_url().endswith("?aa=2&zz=1")


def test_mime_type_png():
    chart = ImageCharts().cht("p").chs("100x100")
    assert chart.image_format is ImageFormat.PNG
    assert chart.mime_type == "image/png"
    assert chart.file_format == "png"


def test_mime_type_gif():
    chart = ImageCharts().cht("p").chs("100x100").chan("100")
    assert chart.mime_type == "image/gif"
    assert chart.file_format == "gif"


def test_user_agent_default():
    assert ImageCharts().user_agent == f"python-image_charts/{__version__}"


def test_user_agent_with_account():
    assert ImageCharts().icac("ACME").user_agent == f"python-image_charts/{__version__} (ACME)"


def test_user_agent_override_wins():
    chart = ImageCharts(DEFAULT_CONFIG.replace(user_agent="custom/2")).icac("ACME")
    assert chart.user_agent == "custom/2"


def test_rows_follow_canonical_order():
    rows = ImageCharts().chs("1x1").cht("p").chd("t:1").rows()
    assert [(r.name, r.encoded) for r in rows] == [("chd", "t%3A1"), ("chs", "1x1"), ("cht", "p")]
