# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Color contrast evaluation following the WCAG relative luminance formula.
"""

import colorsys
import re
from typing import Iterable, Tuple, Union

from page_accessibility_utility.utils.report_models import (
    ColorContrastResult,
    ContrastLevel,
    WCAGLevel,
)

# (red, green, blue) in 0-255 and alpha in 0-1
RGBA = Tuple[float, float, float, float]
ColorValue = Union[str, RGBA]

WHITE: RGBA = (255.0, 255.0, 255.0, 1.0)
BLACK: RGBA = (0.0, 0.0, 0.0, 1.0)
TRANSPARENT: RGBA = (0.0, 0.0, 0.0, 0.0)

LARGE_TEXT_PX = 24.0  # 18pt
LARGE_BOLD_TEXT_PX = 14 * 4 / 3  # 14pt
BOLD_WEIGHT = 700

# Required ratios as (normal text, large text)
CONTRAST_THRESHOLDS = {
    WCAGLevel.AA.value: (4.5, 3.0),
    WCAGLevel.AAA.value: (7.0, 4.5),
}

# CSS Color Module Level 4 named colors
NAMED_COLORS = {
    "aliceblue": "#f0f8ff",
    "antiquewhite": "#faebd7",
    "aqua": "#00ffff",
    "aquamarine": "#7fffd4",
    "azure": "#f0ffff",
    "beige": "#f5f5dc",
    "bisque": "#ffe4c4",
    "black": "#000000",
    "blanchedalmond": "#ffebcd",
    "blue": "#0000ff",
    "blueviolet": "#8a2be2",
    "brown": "#a52a2a",
    "burlywood": "#deb887",
    "cadetblue": "#5f9ea0",
    "chartreuse": "#7fff00",
    "chocolate": "#d2691e",
    "coral": "#ff7f50",
    "cornflowerblue": "#6495ed",
    "cornsilk": "#fff8dc",
    "crimson": "#dc143c",
    "cyan": "#00ffff",
    "darkblue": "#00008b",
    "darkcyan": "#008b8b",
    "darkgoldenrod": "#b8860b",
    "darkgray": "#a9a9a9",
    "darkgreen": "#006400",
    "darkgrey": "#a9a9a9",
    "darkkhaki": "#bdb76b",
    "darkmagenta": "#8b008b",
    "darkolivegreen": "#556b2f",
    "darkorange": "#ff8c00",
    "darkorchid": "#9932cc",
    "darkred": "#8b0000",
    "darksalmon": "#e9967a",
    "darkseagreen": "#8fbc8f",
    "darkslateblue": "#483d8b",
    "darkslategray": "#2f4f4f",
    "darkslategrey": "#2f4f4f",
    "darkturquoise": "#00ced1",
    "darkviolet": "#9400d3",
    "deeppink": "#ff1493",
    "deepskyblue": "#00bfff",
    "dimgray": "#696969",
    "dimgrey": "#696969",
    "dodgerblue": "#1e90ff",
    "firebrick": "#b22222",
    "floralwhite": "#fffaf0",
    "forestgreen": "#228b22",
    "fuchsia": "#ff00ff",
    "gainsboro": "#dcdcdc",
    "ghostwhite": "#f8f8ff",
    "gold": "#ffd700",
    "goldenrod": "#daa520",
    "gray": "#808080",
    "green": "#008000",
    "greenyellow": "#adff2f",
    "grey": "#808080",
    "honeydew": "#f0fff0",
    "hotpink": "#ff69b4",
    "indianred": "#cd5c5c",
    "indigo": "#4b0082",
    "ivory": "#fffff0",
    "khaki": "#f0e68c",
    "lavender": "#e6e6fa",
    "lavenderblush": "#fff0f5",
    "lawngreen": "#7cfc00",
    "lemonchiffon": "#fffacd",
    "lightblue": "#add8e6",
    "lightcoral": "#f08080",
    "lightcyan": "#e0ffff",
    "lightgoldenrodyellow": "#fafad2",
    "lightgray": "#d3d3d3",
    "lightgreen": "#90ee90",
    "lightgrey": "#d3d3d3",
    "lightpink": "#ffb6c1",
    "lightsalmon": "#ffa07a",
    "lightseagreen": "#20b2aa",
    "lightskyblue": "#87cefa",
    "lightslategray": "#778899",
    "lightslategrey": "#778899",
    "lightsteelblue": "#b0c4de",
    "lightyellow": "#ffffe0",
    "lime": "#00ff00",
    "limegreen": "#32cd32",
    "linen": "#faf0e6",
    "magenta": "#ff00ff",
    "maroon": "#800000",
    "mediumaquamarine": "#66cdaa",
    "mediumblue": "#0000cd",
    "mediumorchid": "#ba55d3",
    "mediumpurple": "#9370db",
    "mediumseagreen": "#3cb371",
    "mediumslateblue": "#7b68ee",
    "mediumspringgreen": "#00fa9a",
    "mediumturquoise": "#48d1cc",
    "mediumvioletred": "#c71585",
    "midnightblue": "#191970",
    "mintcream": "#f5fffa",
    "mistyrose": "#ffe4e1",
    "moccasin": "#ffe4b5",
    "navajowhite": "#ffdead",
    "navy": "#000080",
    "oldlace": "#fdf5e6",
    "olive": "#808000",
    "olivedrab": "#6b8e23",
    "orange": "#ffa500",
    "orangered": "#ff4500",
    "orchid": "#da70d6",
    "palegoldenrod": "#eee8aa",
    "palegreen": "#98fb98",
    "paleturquoise": "#afeeee",
    "palevioletred": "#db7093",
    "papayawhip": "#ffefd5",
    "peachpuff": "#ffdab9",
    "peru": "#cd853f",
    "pink": "#ffc0cb",
    "plum": "#dda0dd",
    "powderblue": "#b0e0e6",
    "purple": "#800080",
    "rebeccapurple": "#663399",
    "red": "#ff0000",
    "rosybrown": "#bc8f8f",
    "royalblue": "#4169e1",
    "saddlebrown": "#8b4513",
    "salmon": "#fa8072",
    "sandybrown": "#f4a460",
    "seagreen": "#2e8b57",
    "seashell": "#fff5ee",
    "sienna": "#a0522d",
    "silver": "#c0c0c0",
    "skyblue": "#87ceeb",
    "slateblue": "#6a5acd",
    "slategray": "#708090",
    "slategrey": "#708090",
    "snow": "#fffafa",
    "springgreen": "#00ff7f",
    "steelblue": "#4682b4",
    "tan": "#d2b48c",
    "teal": "#008080",
    "thistle": "#d8bfd8",
    "tomato": "#ff6347",
    "turquoise": "#40e0d0",
    "violet": "#ee82ee",
    "wheat": "#f5deb3",
    "white": "#ffffff",
    "whitesmoke": "#f5f5f5",
    "yellow": "#ffff00",
    "yellowgreen": "#9acd32",
}

_FUNCTION_RE = re.compile(r"^(rgba?|hsla?)\((.*)\)$")


def _parse_channel(token: str, scale: float = 255.0) -> float:
    token = token.strip()
    if token.endswith("%"):
        return float(token[:-1]) * scale / 100.0
    return float(token)


def _parse_alpha(token: str) -> float:
    token = token.strip()
    if token.endswith("%"):
        return float(token[:-1]) / 100.0
    return float(token)


def _clamp(value: float, upper: float) -> float:
    return max(0.0, min(upper, value))


class ColorContrastEvaluator:
    """
    Compute relative luminance and contrast ratios and classify them
    against WCAG AA/AAA thresholds.
    """

    def parse_color(self, value: ColorValue) -> RGBA:
        """
        Parse a CSS color.

        Supports hex (#rgb, #rgba, #rrggbb, #rrggbbaa), rgb()/rgba(),
        hsl()/hsla(), CSS named colors and 'transparent'.

        Args:
            value: CSS color string or an already parsed RGBA tuple

        Returns:
            RGBA tuple

        Raises:
            ValueError: If the color cannot be parsed
        """
        if isinstance(value, tuple):
            if len(value) == 3:
                return (float(value[0]), float(value[1]), float(value[2]), 1.0)
            return tuple(float(channel) for channel in value)

        color = str(value).strip().lower()
        if color == "transparent":
            return TRANSPARENT
        color = NAMED_COLORS.get(color, color)

        if color.startswith("#"):
            return self._parse_hex(color)

        match = _FUNCTION_RE.match(color)
        if not match:
            raise ValueError(f"Unsupported color value: {value!r}")

        function, arguments = match.groups()
        parts = [part for part in re.split(r"[\s,/]+", arguments.strip()) if part]
        if len(parts) not in (3, 4):
            raise ValueError(f"Unsupported color value: {value!r}")
        alpha = _clamp(_parse_alpha(parts[3]), 1.0) if len(parts) == 4 else 1.0

        if function.startswith("rgb"):
            red, green, blue = (_clamp(_parse_channel(part), 255.0) for part in parts[:3])
            return (red, green, blue, alpha)

        hue = float(parts[0].replace("deg", "")) % 360 / 360.0
        saturation = _clamp(_parse_channel(parts[1], 1.0), 1.0)
        lightness = _clamp(_parse_channel(parts[2], 1.0), 1.0)
        red, green, blue = colorsys.hls_to_rgb(hue, lightness, saturation)
        return (red * 255.0, green * 255.0, blue * 255.0, alpha)

    def _parse_hex(self, color: str) -> RGBA:
        digits = color[1:]
        if not re.fullmatch(r"[0-9a-f]+", digits) or len(digits) not in (3, 4, 6, 8):
            raise ValueError(f"Invalid hex color: {color!r}")

        if len(digits) in (3, 4):
            digits = "".join(ch * 2 for ch in digits)

        red, green, blue = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
        alpha = int(digits[6:8], 16) / 255.0 if len(digits) == 8 else 1.0
        return (float(red), float(green), float(blue), alpha)

    def composite(self, top: ColorValue, bottom: ColorValue) -> RGBA:
        """Alpha-composite one color over another."""
        top_rgba = self.parse_color(top)
        bottom_rgba = self.parse_color(bottom)
        alpha = top_rgba[3]
        out_alpha = alpha + bottom_rgba[3] * (1 - alpha)
        if out_alpha == 0:
            return TRANSPARENT

        channels = tuple(
            (top_rgba[i] * alpha + bottom_rgba[i] * bottom_rgba[3] * (1 - alpha)) / out_alpha
            for i in range(3)
        )
        return channels + (out_alpha,)

    def resolve_background(self, layers: Iterable[ColorValue]) -> RGBA:
        """
        Flatten background layers into one opaque color.

        Args:
            layers: Background colors from the element outward to the root

        Returns:
            Opaque RGBA; white shows through wherever no opaque layer exists
        """
        stack = []
        for layer in layers:
            rgba = self.parse_color(layer)
            if rgba[3] <= 0:
                continue
            stack.append(rgba)
            if rgba[3] >= 1:
                break

        result = WHITE
        for layer in reversed(stack):
            result = self.composite(layer, result)
        return result

    @staticmethod
    def _gamma_correct(channel: float) -> float:
        value = channel / 255.0
        if value <= 0.03928:
            return value / 12.92
        return ((value + 0.055) / 1.055) ** 2.4

    def relative_luminance(self, color: ColorValue) -> float:
        """
        Calculate the relative luminance of a color.

        Args:
            color: CSS color string or RGBA tuple

        Returns:
            Relative luminance between 0 and 1
        """
        red, green, blue, _ = self.parse_color(color)
        return (
            0.2126 * self._gamma_correct(red)
            + 0.7152 * self._gamma_correct(green)
            + 0.0722 * self._gamma_correct(blue)
        )

    def ratio(self, foreground: ColorValue, background: ColorValue) -> float:
        """
        Calculate the contrast ratio between two colors.

        A translucent background is placed over white and a translucent
        foreground over the background before measuring. Identical colors
        always measure 1.

        Returns:
            Contrast ratio between 1 and 21
        """
        background_rgba = self.parse_color(background)
        if self.parse_color(foreground) == background_rgba:
            return 1.0
        if background_rgba[3] < 1:
            background_rgba = self.composite(background_rgba, WHITE)

        foreground_rgba = self.parse_color(foreground)
        if foreground_rgba[3] < 1:
            foreground_rgba = self.composite(foreground_rgba, background_rgba)

        first = self.relative_luminance(foreground_rgba)
        second = self.relative_luminance(background_rgba)
        lighter, darker = max(first, second), min(first, second)
        return (lighter + 0.05) / (darker + 0.05)

    @staticmethod
    def is_large_text(font_size_px: float, font_weight: Union[int, str] = 400) -> bool:
        """
        Check whether text counts as large for contrast purposes.

        Large text is at least 18pt, or at least 14pt when bold.
        """
        try:
            weight = int(font_weight)
        except (TypeError, ValueError):
            weight = BOLD_WEIGHT if str(font_weight).lower() in ("bold", "bolder") else 400

        if font_size_px >= LARGE_TEXT_PX:
            return True
        return weight >= BOLD_WEIGHT and font_size_px >= LARGE_BOLD_TEXT_PX - 0.01

    @staticmethod
    def required_ratio(is_large_text: bool, wcag_level: str = WCAGLevel.AA.value) -> float:
        """Minimum ratio for a conformance level; level A uses the AA thresholds."""
        normal, large = CONTRAST_THRESHOLDS.get(wcag_level, CONTRAST_THRESHOLDS[WCAGLevel.AA.value])
        return large if is_large_text else normal

    def evaluate(
        self, foreground: ColorValue, background: ColorValue, is_large_text: bool = False
    ) -> ColorContrastResult:
        """
        Evaluate a foreground/background pair.

        Args:
            foreground: Text color
            background: Background color
            is_large_text: Whether the large-text thresholds apply

        Returns:
            ColorContrastResult with the ratio and the best level reached
        """
        ratio = self.ratio(foreground, background)
        aa_required = self.required_ratio(is_large_text, WCAGLevel.AA.value)
        aaa_required = self.required_ratio(is_large_text, WCAGLevel.AAA.value)

        passes_aaa = ratio >= aaa_required
        passes_aa = ratio >= aa_required
        if passes_aaa:
            level = ContrastLevel.AAA
        elif passes_aa:
            level = ContrastLevel.AA
        else:
            level = ContrastLevel.FAIL

        return ColorContrastResult(
            foreground=self.to_hex(foreground),
            background=self.to_hex(background),
            ratio=round(ratio, 2),
            level=level,
            passes_aa=passes_aa,
            passes_aaa=passes_aaa,
            is_large_text=is_large_text,
            required_ratio=aa_required,
        )

    def to_hex(self, color: ColorValue) -> str:
        """Format a color as #rrggbb, or #rrggbbaa when translucent."""
        red, green, blue, alpha = self.parse_color(color)
        text = "#{:02x}{:02x}{:02x}".format(round(red), round(green), round(blue))
        if alpha < 1:
            text += "{:02x}".format(round(alpha * 255))
        return text
