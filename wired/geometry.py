"""
Geometry value types used by the config schema.

All types are pydantic models so they can be read straight out of the
config document. None of them depend on anything else in the package.
"""

import copy
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GeometryModel(BaseModel):
    """Base for value types: unknown keys are an error, instances are frozen."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class Vec2(GeometryModel):
    x: float = 0.0
    y: float = 0.0


class Rect(GeometryModel):
    """Axis-aligned rectangle with its origin at the top-left corner."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def top_left(self) -> Vec2:
        return Vec2(x=self.x, y=self.y)

    def top_right(self) -> Vec2:
        return Vec2(x=self.x + self.width, y=self.y)

    def bottom_left(self) -> Vec2:
        return Vec2(x=self.x, y=self.y + self.height)

    def bottom_right(self) -> Vec2:
        return Vec2(x=self.x + self.width, y=self.y + self.height)

    def mid_left(self) -> Vec2:
        return Vec2(x=self.x, y=self.y + self.height / 2)

    def mid_right(self) -> Vec2:
        return Vec2(x=self.x + self.width, y=self.y + self.height / 2)

    def mid_top(self) -> Vec2:
        return Vec2(x=self.x + self.width / 2, y=self.y)

    def mid_bottom(self) -> Vec2:
        return Vec2(x=self.x + self.width / 2, y=self.y + self.height)


class MinMax(GeometryModel):
    """Inclusive size range."""

    min: int = Field(0, ge=0)
    max: int = Field(0, ge=0)

    @model_validator(mode="after")
    def validate_range(self):
        """Reject inverted ranges."""
        if self.min > self.max:
            raise ValueError(f"min ({self.min}) must not exceed max ({self.max})")
        return self


class Padding(GeometryModel):
    left: float = 0.0
    right: float = 0.0
    top: float = 0.0
    bottom: float = 0.0

    @property
    def width(self) -> float:
        return self.left + self.right

    @property
    def height(self) -> float:
        return self.top + self.bottom


class Offset(GeometryModel):
    x: float = 0.0
    y: float = 0.0


class Color(GeometryModel):
    """RGBA color with normalized float channels.

    Documents may also spell a color as ``"#RRGGBB"`` or ``"#RRGGBBAA"``.
    """

    r: float = Field(..., ge=0.0, le=1.0)
    g: float = Field(..., ge=0.0, le=1.0)
    b: float = Field(..., ge=0.0, le=1.0)
    a: float = Field(1.0, ge=0.0, le=1.0)

    @model_validator(mode="before")
    @classmethod
    def parse_hex(cls, data: Any) -> Any:
        """Expand hex strings into channel values."""
        if not isinstance(data, str):
            return data

        digits = data.strip().removeprefix("#")
        if len(digits) not in (6, 8):
            raise ValueError(f"Invalid hex color: {data}")
        try:
            channels = [int(digits[i:i + 2], 16) / 255.0 for i in range(0, len(digits), 2)]
        except ValueError:
            raise ValueError(f"Invalid hex color: {data}")

        if len(channels) == 3:
            channels.append(1.0)
        r, g, b, a = channels
        return {"r": r, "g": g, "b": b, "a": a}


class AnchorPosition(str, Enum):
    """Named anchor points on a rectangle."""
    ML = "ML"
    TL = "TL"
    MT = "MT"
    TR = "TR"
    MR = "MR"
    BR = "BR"
    MB = "MB"
    BL = "BL"

    def get_pos(self, rect: Rect) -> Vec2:
        """Return the point on ``rect`` this anchor refers to."""
        accessor = {
            AnchorPosition.ML: rect.mid_left,
            AnchorPosition.TL: rect.top_left,
            AnchorPosition.MT: rect.mid_top,
            AnchorPosition.TR: rect.top_right,
            AnchorPosition.MR: rect.mid_right,
            AnchorPosition.BR: rect.bottom_right,
            AnchorPosition.MB: rect.mid_bottom,
            AnchorPosition.BL: rect.bottom_left,
        }[self]
        return accessor()


class TextDimensions(GeometryModel):
    width: MinMax = Field(default_factory=MinMax)
    height: MinMax = Field(default_factory=MinMax)


class TextDimensionVariants(GeometryModel):
    """Text size ranges keyed by which images a notification carries.

    Image variants left out of the document are filled from ``dimensions``
    when the model is built, so lookups never fall through.
    """

    dimensions: TextDimensions = Field(default_factory=TextDimensions)
    dimensions_image_hint: TextDimensions = Field(default_factory=TextDimensions)
    dimensions_image_app: TextDimensions = Field(default_factory=TextDimensions)
    dimensions_image_both: TextDimensions = Field(default_factory=TextDimensions)

    @model_validator(mode="before")
    @classmethod
    def fill_image_variants(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "dimensions" not in data:
            return data
        data = dict(data)
        for name in ("dimensions_image_hint", "dimensions_image_app", "dimensions_image_both"):
            data.setdefault(name, copy.deepcopy(data["dimensions"]))
        return data

    def get_dimensions(self, notification: Any) -> TextDimensions:
        """
        Select the dimension set for a notification.

        Args:
            notification: Any object exposing ``app_image`` and ``hint_image``;
                ``None`` means the image is absent

        Returns:
            The matching TextDimensions
        """
        has_app_image = getattr(notification, "app_image", None) is not None
        has_hint_image = getattr(notification, "hint_image", None) is not None

        if has_app_image and has_hint_image:
            return self.dimensions_image_both
        if has_app_image:
            return self.dimensions_image_app
        if has_hint_image:
            return self.dimensions_image_hint
        return self.dimensions
