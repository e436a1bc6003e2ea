"""Color specification parsing for themes and terminal output."""

from __future__ import annotations

from dataclasses import dataclass

# Standard ANSI color names
COLORS = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
}

# Names that only exist as bright variants
GRAY_ALIASES = {"gray", "grey"}

# Text attributes and their SGR codes
ATTRIBUTES = {
    "bold": 1,
    "dim": 2,
    "italic": 3,
    "underline": 4,
    "blink": 5,
    "reverse": 7,
    "inverse": 7,
    "hidden": 8,
    "strikethrough": 9,
}

# Attribute names understood by prompt_toolkit styles
PROMPT_TOOLKIT_ATTRIBUTES = {
    "bold": "bold",
    "italic": "italic",
    "underline": "underline",
    "blink": "blink",
    "reverse": "reverse",
    "hidden": "hidden",
    "strikethrough": "strike",
}

RESET = "\033[0m"


@dataclass
class ParsedColor:
    """Parsed color specification.

    Attributes:
        fg: Foreground color name ("red", "bright red") or hex string
        bg: Background color name or hex string
        attributes: Enabled text attributes, in spec order
    """

    fg: str | None = None
    bg: str | None = None
    attributes: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.fg is None and self.bg is None and not self.attributes

    def to_ansi(self) -> str:
        """Convert to an ANSI SGR escape sequence."""
        codes = [ATTRIBUTES[attr] for attr in self.attributes]

        if self.fg is not None:
            fg_code = _color_code(self.fg, foreground=True)
            if fg_code is not None:
                codes.append(fg_code)

        if self.bg is not None:
            bg_code = _color_code(self.bg, foreground=False)
            if bg_code is not None:
                codes.append(bg_code)

        if not codes:
            return ""
        return f"\033[{';'.join(str(c) for c in codes)}m"

    def wrap(self, text: str) -> str:
        """Wrap text in this color, resetting afterwards."""
        start = self.to_ansi()
        if not start:
            return text
        return f"{start}{text}{RESET}"

    def to_prompt_toolkit_style(self) -> str:
        """Convert to a prompt_toolkit style string."""
        parts = [
            PROMPT_TOOLKIT_ATTRIBUTES[attr]
            for attr in self.attributes
            if attr in PROMPT_TOOLKIT_ATTRIBUTES
        ]

        if self.fg is not None:
            parts.append(_prompt_toolkit_color(self.fg))
        if self.bg is not None:
            parts.append(f"bg:{_prompt_toolkit_color(self.bg)}")

        return " ".join(parts)


def _color_code(color: str, foreground: bool) -> int | None:
    """Convert a color name to its SGR code."""
    base = 30 if foreground else 40
    bright_base = 90 if foreground else 100

    if color in GRAY_ALIASES:
        return bright_base
    if color in COLORS:
        return base + COLORS[color]
    if color.startswith("bright "):
        name = color[7:]
        if name in COLORS:
            return bright_base + COLORS[name]

    # Hex colors have no basic SGR code
    return None


def _prompt_toolkit_color(color: str) -> str:
    """Convert a color name to prompt_toolkit's ansi naming.

    prompt_toolkit calls plain white "ansigray" and bright white
    "ansiwhite"; the other bright colors are "ansibright<name>".
    """
    if color.startswith("#"):
        return color
    if color in GRAY_ALIASES or color == "bright black":
        return "ansibrightblack"
    if color == "white":
        return "ansigray"
    if color == "bright white":
        return "ansiwhite"
    if color.startswith("bright "):
        return "ansibright" + color[len("bright "):]
    return "ansi" + color


class ColorParser:
    """Parser for color specification strings."""

    def parse(self, color_spec: str) -> ParsedColor:
        """Parse a color specification string.

        Args:
            color_spec: Color string like "bold red on white"

        Returns:
            ParsedColor object

        Examples:
            >>> color = ColorParser().parse("bold bright cyan on black")
            >>> color.fg
            'bright cyan'
            >>> color.bg
            'black'
            >>> color.attributes
            ('bold',)
        """
        result = ParsedColor()
        attributes: list[str] = []
        on_background = False
        bright = False

        for word in color_spec.lower().split():
            if word in ATTRIBUTES:
                name = "reverse" if word == "inverse" else word
                if name not in attributes:
                    attributes.append(name)
            elif word == "on":
                on_background = True
            elif word == "bright":
                bright = True
            elif word in COLORS or word in GRAY_ALIASES or word.startswith("#"):
                color = f"bright {word}" if bright and word in COLORS else word
                bright = False
                # The first color on each side wins
                if on_background:
                    result.bg = result.bg or color
                else:
                    result.fg = result.fg or color

        result.attributes = tuple(attributes)
        return result


def parse_color(color_spec: str) -> ParsedColor:
    """Parse a color specification string."""
    return ColorParser().parse(color_spec)
