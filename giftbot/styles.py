"""Terminal colour styles, brand palette and colour gradients."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

_RESET = "\x1b[0m"
_HEX_RE = re.compile(
    r"#([0-9a-fA-F]{1,2})(?:([0-9a-fA-F]{1,2})(?:([0-9a-fA-F]{1,2}))?)?"
)


def _round_half_away(value: float) -> int:
    magnitude = math.floor(abs(value) + 0.5)
    return -magnitude if value < 0 else magnitude


@dataclass(frozen=True)
class Rgb:
    """A colour with floating-point channels in the 0-255 range."""

    r: float
    g: float
    b: float

    def hex(self) -> str:
        """The colour as ``#rrggbb``."""
        return "#" + "".join(f"{_round_half_away(c):02x}" for c in (self.r, self.g, self.b))


def hex_to_rgb(value: str) -> Rgb:
    """Parse ``#rrggbb``; channels that cannot be read are zero."""
    match = _HEX_RE.match(value)
    if match is None:
        return Rgb(0.0, 0.0, 0.0)
    r, g, b = (float(int(part, 16)) if part else 0.0 for part in match.groups())
    return Rgb(r, g, b)


def lerp_rgb(a: Rgb, b: Rgb, t: float) -> Rgb:
    """Linear interpolation between two colours."""
    return Rgb(a.r + (b.r - a.r) * t, a.g + (b.g - a.g) * t, a.b + (b.b - a.b) * t)


def multi_lerp_rgb(t: float, colors: list[Rgb]) -> Rgb:
    """Interpolate along a sequence of colour stops, ``t`` in 0..1."""
    if len(colors) < 2:
        return colors[0] if colors else Rgb(255.0, 255.0, 255.0)
    segments = len(colors) - 1
    seg = min(int(t * segments), segments - 1)
    local_t = t * segments - seg
    return lerp_rgb(colors[seg], colors[seg + 1], local_t)


def _color_code(color: str) -> str:
    if color.startswith("#"):
        rgb = hex_to_rgb(color)
        channels = ";".join(str(_round_half_away(c)) for c in (rgb.r, rgb.g, rgb.b))
        return f"38;2;{channels}"
    return f"38;5;{color}"


@dataclass(frozen=True)
class Style:
    """A foreground colour, boldness and horizontal padding for terminal text.

    ``foreground`` is either ``#rrggbb`` or a 256-colour palette index.
    """

    foreground: str | None = None
    bold: bool = False
    padding: int = 0

    def render(self, text: str) -> str:
        """Apply the style to every line of ``text``."""
        codes = []
        if self.bold:
            codes.append("1")
        if self.foreground:
            codes.append(_color_code(self.foreground))
        prefix = f"\x1b[{';'.join(codes)}m" if codes else ""
        pad = " " * self.padding

        def one(line: str) -> str:
            body = f"{pad}{line}{pad}"
            if not prefix or not body:
                return body
            return f"{prefix}{body}{_RESET}"

        return "\n".join(one(line) for line in text.split("\n"))


BRAND_COLORS = ("#06b6d4", "#3b82f6", "#8b5cf6", "#d946ef")
BRAND_MID = "#3b82f6"
BRAND_TO = "#d946ef"
BRAND_RGBS = tuple(hex_to_rgb(c) for c in BRAND_COLORS)

STYLE_HEADER = Style(foreground="245", bold=True)
STYLE_DIM = Style(foreground="240")
STYLE_OK = Style(foreground="82")
STYLE_OK_BOLD = Style(foreground="82", bold=True)
STYLE_ERR = Style(foreground="196")
STYLE_ERR_BOLD = Style(foreground="196", bold=True)
STYLE_WARN = Style(foreground="214")
STYLE_FOOTER = Style(foreground="240")
STYLE_FOOTER_KEY = Style(foreground=BRAND_MID, bold=True)
STYLE_FOOTER_DESC = Style(foreground="245")
STYLE_MENU_ITEM = Style(padding=2)
STYLE_MENU_SELECTED = Style(foreground=BRAND_MID, bold=True, padding=2)
STYLE_MENU_CURSOR = Style(foreground=BRAND_TO, bold=True)
STYLE_MENU_DESC = Style(foreground="240", padding=2)

DOT_ACTIVE = Style(foreground="82").render("●")
DOT_STOPPED = Style(foreground="214").render("●")
DOT_NONE = Style(foreground="240").render("○")

LOG_TIME = Style(foreground="240")
LOG_DEBUG = Style(foreground="240", bold=True)
LOG_INFO = Style(foreground="75", bold=True)
LOG_WARN = Style(foreground="214", bold=True)
LOG_ERROR = Style(foreground="196", bold=True)
LOG_MSG = Style(foreground="255")
LOG_ACCOUNT = Style(foreground="141")
LOG_KEY = Style(foreground="245")
LOG_VAL = Style(foreground="252")

TABLE_HEADER = Style(foreground="245", bold=True, padding=1)
TABLE_CELL = Style(padding=1)
TABLE_BORDER = Style(foreground="236")

STYLE_PROGRESS_EMPTY = Style(foreground="236")
STYLE_PROGRESS_TEXT = Style(foreground="245")
STYLE_THUMB = Style(foreground=BRAND_MID)


def gradient_multi(text: str, *args: str) -> str:
    """Colour each character of ``text`` along a gradient through the given colours."""
    colors = args
    if len(colors) < 2:
        if len(colors) == 1:
            return Style(foreground=colors[0]).render(text)
        return text
    if not text:
        return ""
    stops = [hex_to_rgb(c) for c in colors]
    denominator = max(len(text) - 1, 1)
    return "".join(
        Style(foreground=multi_lerp_rgb(i / denominator, stops).hex()).render(ch)
        for i, ch in enumerate(text)
    )


def status_ok(message: str) -> str:
    return "  " + STYLE_OK.render("✓") + " " + message


def status_err(message: str) -> str:
    return "  " + STYLE_ERR.render("✗") + " " + message


def footer_hint(key: str, desc: str) -> str:
    return STYLE_FOOTER_KEY.render(key) + " " + STYLE_FOOTER_DESC.render(desc)