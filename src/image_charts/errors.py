from __future__ import annotations
from typing import Optional


class ImageChartsError(Exception):
    """Failure while fetching a chart: transport, remote rejection or file I/O."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"ImageChartsError(message={self.message!r}, code={self.code!r}, "
            f"status_code={self.status_code!r})"
        )
