# Copyright 2025 Amazon.com, Inc. or its affiliates.
# SPDX-License-Identifier: Apache-2.0

"""
Color contrast accessibility checks.

This module provides checks for proper color contrast between text and background.
Only inline styles are considered; stylesheet rules need a rendering engine.
"""

import re
from typing import Tuple, Optional

from bs4 import NavigableString, Tag, Comment

from markup_accessibility.audit.base_check import AccessibilityCheck

NAMED_COLORS = {
    "black": "#000000",
    "white": "#FFFFFF",
    "red": "#FF0000",
    "green": "#008000",
    "blue": "#0000FF",
    "yellow": "#FFFF00",
    "gray": "#808080",
    "grey": "#808080",
    "silver": "#C0C0C0",
    "maroon": "#800000",
    "navy": "#000080",
    "orange": "#FFA500",
    "purple": "#800080",
    "teal": "#008080",
    "lightgray": "#D3D3D3",
    "lightgrey": "#D3D3D3",
    "darkgray": "#A9A9A9",
    "darkgrey": "#A9A9A9",
}

DEFAULT_TEXT_COLOR = "#000000"
DEFAULT_BACKGROUND_COLOR = "#FFFFFF"

COLOR_VALUE = r"(#[0-9a-fA-F]{3}\b|#[0-9a-fA-F]{6}\b|rgba?\([^)]*\)|[a-zA-Z]+)"
TEXT_COLOR_PATTERN = re.compile(r"(?<![-\w])color\s*:\s*([^;]+)", re.IGNORECASE)
BACKGROUND_PATTERN = re.compile(
    r"(?<![-\w])background(?:-color)?\s*:\s*([^;]+)", re.IGNORECASE
)
FONT_SIZE_PATTERN = re.compile(r"font-size\s*:\s*(\d+(?:\.\d+)?)(px|pt|em|rem)", re.IGNORECASE)
FONT_WEIGHT_PATTERN = re.compile(r"font-weight\s*:\s*(bold|bolder|[6-9]00)", re.IGNORECASE)

NORMAL_TEXT_RATIO = 4.5
LARGE_TEXT_RATIO = 3.0


def normalize_color(value: str) -> Optional[str]:
    """
    Normalize a CSS color value to an uppercase 6-digit hex string.

    Args:
        value: CSS color value (hex, rgb(), rgba() or a basic named color)

    Returns:
        Hex color, or None when the value cannot be resolved statically
    """
    value = value.strip().lower().replace("!important", "").strip()

    if value.startswith("#"):
        digits = value[1:]
        if len(digits) == 3 and all(c in "0123456789abcdef" for c in digits):
            return "#" + "".join(c * 2 for c in digits).upper()
        if len(digits) == 6 and all(c in "0123456789abcdef" for c in digits):
            return value.upper()
        return None

    rgb_match = re.match(
        r"rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*(\d*\.?\d+)\s*)?\)$",
        value,
    )
    if rgb_match:
        r, g, b = (min(int(channel), 255) for channel in rgb_match.groups()[:3])
        alpha = rgb_match.group(4)
        # Translucent colors blend with whatever is behind them
        if alpha is not None and float(alpha) < 1:
            return None
        return f"#{r:02X}{g:02X}{b:02X}"

    return NAMED_COLORS.get(value)


def relative_luminance(hex_color: str) -> float:
    """
    Calculate the WCAG relative luminance of a hex color.

    Args:
        hex_color: Color as #RRGGBB

    Returns:
        Luminance between 0 (black) and 1 (white)
    """
    hex_color = hex_color.lstrip("#")
    channels = [int(hex_color[i : i + 2], 16) / 255 for i in (0, 2, 4)]
    r, g, b = (
        value / 12.92 if value <= 0.03928 else ((value + 0.055) / 1.055) ** 2.4
        for value in channels
    )
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(color1: str, color2: str) -> float:
    """
    Calculate the contrast ratio between two colors.

    Args:
        color1: The first color as a hex string
        color2: The second color as a hex string

    Returns:
        Ratio between 1.0 and 21.0
    """
    l1 = relative_luminance(color1)
    l2 = relative_luminance(color2)
    lighter, darker = max(l1, l2), min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def _style(element: Tag) -> str:
    return element.get("style") or ""


def _has_own_text(element: Tag) -> bool:
    return any(
        isinstance(child, NavigableString)
        and not isinstance(child, Comment)
        and child.strip()
        for child in element.children
    )


class ColorContrastCheck(AccessibilityCheck):
    """Check for proper color contrast (WCAG 1.4.3)."""

    def check(self) -> None:
        """
        Check if text elements have sufficient color contrast with their background.

        An element is only evaluated when it holds text directly and it or an
        ancestor sets a color or background in an inline style.

        Issues:
            - insufficient-color-contrast: When text color doesn't have
                enough contrast with background
            - potential-color-contrast-issue: When an inline color can't be resolved
            - compliant-color-contrast: When explicitly colored text has enough contrast
        """
        body = self.soup.find("body") or self.soup
        for element in body.find_all(True):
            if element.name in ("script", "style", "noscript", "template"):
                continue
            if not _has_own_text(element) or self.is_hidden(element):
                continue

            text_color, text_explicit, text_resolved = self._resolve(
                element, TEXT_COLOR_PATTERN, DEFAULT_TEXT_COLOR
            )
            bg_color, bg_explicit, bg_resolved = self._resolve(
                element, BACKGROUND_PATTERN, DEFAULT_BACKGROUND_COLOR
            )

            if not text_explicit and not bg_explicit:
                continue

            if not text_resolved or not bg_resolved:
                self.add_issue(
                    "potential-color-contrast-issue",
                    "1.4.3",
                    "minor",
                    element=element,
                    description="Potential color contrast issue - colors "
                    + "could not be determined automatically",
                    status="needs_remediation",
                )
                continue

            ratio = contrast_ratio(text_color, bg_color)
            is_large = self._is_large_text(element)
            min_contrast = LARGE_TEXT_RATIO if is_large else NORMAL_TEXT_RATIO

            if ratio < min_contrast:
                self.add_issue(
                    "insufficient-color-contrast",
                    "1.4.3",
                    "major",
                    element=element,
                    description=f"Insufficient color contrast: {ratio:.2f}:1 "
                    + f"(minimum required: {min_contrast}:1)",
                    status="needs_remediation",
                    location={
                        "text_color": text_color,
                        "background_color": bg_color,
                        "contrast_ratio": f"{ratio:.2f}:1",
                        "required_ratio": f"{min_contrast}:1",
                        "is_large_text": is_large,
                    },
                )
            else:
                self.add_issue(
                    "compliant-color-contrast",
                    "1.4.3",
                    "major",
                    element=element,
                    description=f"Color contrast {ratio:.2f}:1 meets {min_contrast}:1",
                    status="compliant",
                )

    def _resolve(
        self, element: Tag, pattern: re.Pattern, default: str
    ) -> Tuple[Optional[str], bool, bool]:
        """
        Find the effective inline color for an element by walking up its ancestors.

        Returns:
            Tuple of (hex color, whether any inline value applied, whether it resolved)
        """
        current = element
        while isinstance(current, Tag) and current.name != "[document]":
            match = pattern.search(_style(current))
            if match:
                raw = match.group(1).strip()
                if pattern is BACKGROUND_PATTERN and "url(" in raw.lower():
                    return None, True, False
                color_match = re.match(COLOR_VALUE, raw)
                color = normalize_color(color_match.group(1)) if color_match else None
                if color is None and raw.lower() in ("transparent", "inherit", "initial", "none"):
                    current = current.parent
                    continue
                return color, True, color is not None
            current = current.parent
        return default, False, True

    def _is_large_text(self, element: Tag) -> bool:
        """
        Determine if an element contains large text.

        Large text is 24px or larger, or 18.67px bold, or an h1-h3 heading.
        """
        if element.name in ["h1", "h2", "h3"]:
            return True

        size_match = FONT_SIZE_PATTERN.search(_style(element))
        if not size_match:
            return False

        size = float(size_match.group(1))
        unit = size_match.group(2).lower()
        if unit == "pt":
            size = size * 4 / 3
        elif unit in ("em", "rem"):
            size = size * 16

        if size >= 24:
            return True
        return size >= 18.67 and self._is_bold(element)

    def _is_bold(self, element: Tag) -> bool:
        if element.name in ["b", "strong"] or element.find_parent(["b", "strong"]):
            return True
        return bool(FONT_WEIGHT_PATTERN.search(_style(element)))
