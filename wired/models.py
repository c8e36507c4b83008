"""
Pydantic data models for the wired configuration.

Defines the Config root, shortcut bindings, and the recursive layout tree
consumed by the renderer.
"""

from enum import Enum
from typing import Annotated, Iterator, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .geometry import (
    AnchorPosition,
    Color,
    MinMax,
    Offset,
    Padding,
    TextDimensionVariants,
    Vec2,
)


class SchemaModel(BaseModel):
    """Base for schema entities: unknown keys are an error, instances are frozen."""

    model_config = ConfigDict(extra="forbid", frozen=True)


# Enumerations

class EllipsizeMode(str, Enum):
    """Where text is cut when it overflows its block."""
    START = "start"
    MIDDLE = "middle"
    END = "end"
    NONE = "none"


class ImageType(str, Enum):
    """Which notification image an ImageBlock shows."""
    HINT = "hint"
    APP = "app"
    HINT_THEN_APP = "hint_then_app"


class FilterMode(str, Enum):
    """Resampling filter for scaled images."""
    NEAREST = "nearest"
    TRIANGLE = "triangle"
    CATMULL_ROM = "catmull_rom"
    GAUSSIAN = "gaussian"
    LANCZOS3 = "lanczos3"


# Layout elements

class Hook(SchemaModel):
    """Attach ``self_anchor`` of a block to ``parent_anchor`` of its parent."""

    parent_anchor: AnchorPosition = AnchorPosition.TL
    self_anchor: AnchorPosition = AnchorPosition.TL


class NotificationBlock(SchemaModel):
    """Outer frame of a notification window; only valid as layout root."""

    type: Literal["NotificationBlock"] = "NotificationBlock"
    monitor: int = Field(0, ge=0, description="Monitor index the notifications appear on")
    border_width: float = Field(3.0, ge=0)
    border_rounding: float = Field(3.0, ge=0)
    background_color: Color
    border_color: Color
    border_color_low: Color
    border_color_critical: Color
    border_color_paused: Color
    gap: Vec2 = Field(default_factory=Vec2, description="Space between stacked notifications")
    notification_hook: Hook = Field(default_factory=Hook)


class TextBlock(SchemaModel):
    type: Literal["TextBlock"] = "TextBlock"
    text: str = Field(..., description="Format string, e.g. %s for summary, %b for body")
    font: str = "Arial 11"
    ellipsize: EllipsizeMode = EllipsizeMode.MIDDLE
    color: Color
    color_hovered: Optional[Color] = None
    padding: Padding = Field(default_factory=Padding)
    dimensions: TextDimensionVariants = Field(default_factory=TextDimensionVariants)


class ScrollingTextBlock(SchemaModel):
    type: Literal["ScrollingTextBlock"] = "ScrollingTextBlock"
    text: str
    font: str = "Arial 11"
    color: Color
    color_hovered: Optional[Color] = None
    padding: Padding = Field(default_factory=Padding)
    width: MinMax = Field(default_factory=MinMax)
    scroll_speed: float = Field(0.1, ge=0)
    lhs_dist: float = Field(35.0, ge=0)
    rhs_dist: float = Field(35.0, ge=0)
    scroll_t: float = Field(1.0, ge=0)


class ImageBlock(SchemaModel):
    type: Literal["ImageBlock"] = "ImageBlock"
    image_type: ImageType = ImageType.HINT
    padding: Padding = Field(default_factory=Padding)
    rounding: float = Field(0.0, ge=0)
    scale_width: int = Field(48, ge=1)
    scale_height: int = Field(48, ge=1)
    filter_mode: FilterMode = FilterMode.LANCZOS3


LayoutElement = Annotated[
    Union[NotificationBlock, TextBlock, ScrollingTextBlock, ImageBlock],
    Field(discriminator="type"),
]


class LayoutBlock(SchemaModel):
    """Node of the layout tree."""

    name: str = Field(..., min_length=1)
    hook: Hook = Field(default_factory=Hook)
    offset: Offset = Field(default_factory=Offset)
    params: LayoutElement
    children: List["LayoutBlock"] = Field(default_factory=list)

    def iter_blocks(self) -> Iterator["LayoutBlock"]:
        """Walk this block and its descendants depth-first, parents first."""
        yield self
        for child in self.children:
            yield from child.iter_blocks()

    def find(self, name: str) -> Optional["LayoutBlock"]:
        """Return the first block called ``name``, or None."""
        for block in self.iter_blocks():
            if block.name == name:
                return block
        return None


# Root entities

class ShortcutsConfig(SchemaModel):
    """Button/key codes bound to notification actions.

    Codes outside the range the input layer reports (e.g. 99) effectively
    disable a binding. Duplicate codes are allowed.
    """

    notification_close: int = Field(1, ge=0, le=255)
    notification_closeall: int = Field(3, ge=0, le=255)
    notification_pause: int = Field(99, ge=0, le=255)
    notification_url: int = Field(2, ge=0, le=255)

    def duplicate_codes(self) -> List[int]:
        """Codes bound to more than one action, in ascending order."""
        codes = [
            self.notification_close,
            self.notification_closeall,
            self.notification_pause,
            self.notification_url,
        ]
        return sorted({code for code in codes if codes.count(code) > 1})


class Config(SchemaModel):
    """Validated settings tree for the daemon.

    Instances are frozen; edits go through ``ConfigRegistry.get_mut()``,
    which rebuilds and revalidates the whole tree.
    """

    max_notifications: int = Field(..., ge=0, description="0 means unlimited")
    min_window_width: int = Field(..., ge=0)
    min_window_height: int = Field(..., ge=0)
    timeout: int = Field(..., description="Default notification timeout in milliseconds")
    poll_interval: int = Field(..., ge=1, description="Main loop tick in milliseconds")
    debug: bool = False
    debug_color: Color = Field(default_factory=lambda: Color(r=0.0, g=1.0, b=0.0, a=1.0))
    shortcuts: ShortcutsConfig = Field(default_factory=ShortcutsConfig)
    layout: LayoutBlock
