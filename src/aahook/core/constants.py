"""Shared constants for terminal output and color themes."""

# ANSI escape sequences
ESC = "\x1b"
CSI = f"{ESC}["
RESET = f"{CSI}0m"

# Cursor and screen control
HIDE_CURSOR = f"{CSI}?25l"
SHOW_CURSOR = f"{CSI}?25h"
CLEAR_LINE = f"{CSI}2K\r"
CLEAR_TO_END = f"{CSI}0J"
SAVE_CURSOR = f"{ESC}7"      # DEC save, single slot
RESTORE_CURSOR = f"{ESC}8"   # DEC restore

# Terminal-native blinking
BLINK_ON = f"{CSI}5m"
BLINK_OFF = f"{CSI}25m"

# SGR style attributes accepted by themes
STYLE_CODES: dict[str, int] = {
    "bold": 1,
    "dim": 2,
    "italic": 3,
    "underline": 4,
    "blink": 5,
    "reverse": 7,
    "hidden": 8,
    "strikethrough": 9,
}

# Standard 16-color ANSI palette (index into 30-37/90-97 and 40-47/100-107)
COLORS_16 = {
    # Standard colors (30-37 fg, 40-47 bg)
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
    # Bright colors (90-97 fg, 100-107 bg)
    "bright_black": 8,
    "bright_red": 9,
    "bright_green": 10,
    "bright_yellow": 11,
    "bright_blue": 12,
    "bright_magenta": 13,
    "bright_cyan": 14,
    "bright_white": 15,
}

# Aliases found in hand-written theme files
COLOR_ALIASES = {
    "gray": "bright_black",
    "grey": "bright_black",
}

# Fallback terminal dimensions (rows, cols)
DEFAULT_TERMINAL_SIZE = (24, 80)
