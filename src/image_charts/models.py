from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List

from pydantic import BaseModel, TypeAdapter


class ImageFormat(str, Enum):
    PNG = "png"
    GIF = "gif"

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"


class ValidationMessage(BaseModel):
    """One entry of the ``x-ic-error-validation`` response header."""
    message: str


VALIDATION_MESSAGES = TypeAdapter(List[ValidationMessage])


@dataclass(frozen=True)
class ParamRow:
    """A parameter as it appears in the canonical query string."""
    name: str
    value: str
    encoded: str
