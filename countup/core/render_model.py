"""Render model: what the widget shows, as plain data.

Nothing in here touches Qt. The window turns a RenderModel into pixels; this
module only decides which strings go where, and in which style.
"""

from dataclasses import dataclass
from typing import Literal

DAYS_PER_YEAR = 365
DAYS_PER_MONTH = 28
DAYS_PER_WEEK = 7

Color = Literal["label", "value"]
Size = Literal["large", "small"]
Anchor = Literal["left_top", "right_top"]


@dataclass(frozen=True)
class TextStyle:
    color: Color = "label"
    size: Size = "large"
    anchor: Anchor = "left_top"


@dataclass(frozen=True)
class TextItem:
    text: str
    x: int
    y: int
    style: TextStyle


@dataclass(frozen=True)
class RenderModel:
    width: int
    height: int
    background: str
    items: tuple[TextItem, ...] = ()

    @property
    def texts(self):
        return [item.text for item in self.items]


@dataclass(frozen=True)
class Layout:
    """Pixel positions on the logical 270x90 canvas."""
    width: int = 270
    height: int = 90
    header_x: int = 4
    header_y: int = 4
    col_num: int = 120
    col_period: int = 128
    first_row_y: int = 24
    row_height: int = 16
    # x offset of the small "or" from col_period, one per gap between diff rows
    or_offsets: tuple[int, ...] = (42, 52, 62)
    or_nudge_y: int = 5


HEADER_STYLE = TextStyle("label", "large", "left_top")
VALUE_STYLE = TextStyle("value", "large", "right_top")
UNIT_STYLE = TextStyle("label", "large", "left_top")
OR_STYLE = TextStyle("label", "small", "left_top")


def split_days(days):
    """Break days into years, 28-day months and leftover days.

    Uses a flat 365-day year and 28-day month; this is not calendar accurate.
    """
    years = days // DAYS_PER_YEAR
    remaining = days - years * DAYS_PER_YEAR
    months = remaining // DAYS_PER_MONTH
    remaining = remaining - months * DAYS_PER_MONTH
    return years, months, remaining


def diff_units(days):
    """The same span in days, weeks, months and years, each floored from days."""
    return days, days // DAYS_PER_WEEK, days // DAYS_PER_MONTH, days // DAYS_PER_YEAR


def _header(label, layout):
    return TextItem(f"Since {label} it's been", layout.header_x, layout.header_y, HEADER_STYLE)


def _row(value, unit, row, layout):
    y = layout.first_row_y + row * layout.row_height
    return [
        TextItem(str(value), layout.col_num, y, VALUE_STYLE),
        TextItem(unit, layout.col_period, y, UNIT_STYLE),
    ]


def render_split(days, label, layout=None):
    layout = layout or Layout()
    years, months, rest = split_days(days)
    items = [_header(label, layout)]
    for row, (value, unit) in enumerate(((years, "YEARS"), (months, "MONTHS"), (rest, "DAYS"))):
        items.extend(_row(value, unit, row, layout))
    return RenderModel(layout.width, layout.height, "background", tuple(items))


def render_diff(days, label, layout=None):
    layout = layout or Layout()
    rows = list(zip(diff_units(days), ("DAYS", "WEEKS", "MONTHS", "YEARS")))
    items = [_header(label, layout)]
    for row, (value, unit) in enumerate(rows):
        items.extend(_row(value, unit, row, layout))
        # "or" trails every row except the last
        if row < len(rows) - 1 and row < len(layout.or_offsets):
            y = layout.first_row_y + row * layout.row_height + layout.or_nudge_y
            items.append(TextItem("or", layout.col_period + layout.or_offsets[row], y, OR_STYLE))
    return RenderModel(layout.width, layout.height, "background", tuple(items))
