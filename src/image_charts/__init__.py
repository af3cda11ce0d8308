"""Client for the Image-Charts API: build, sign and fetch static chart images."""
from ._version import __version__
from .chart import ImageCharts, ImageChartsBuilder
from .config import DEFAULT_CONFIG, ImageChartsConfig
from .errors import ImageChartsError
from .params import ChartParams

__all__ = [
    "DEFAULT_CONFIG",
    "ChartParams",
    "ImageCharts",
    "ImageChartsBuilder",
    "ImageChartsConfig",
    "ImageChartsError",
    "__version__",
]
