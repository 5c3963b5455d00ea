from __future__ import annotations

GEODE_VERSION = "0.3.0"
GEODE_TAB_STOP = 2
GEODE_QUIT_TIMES = 1
GEODE_QUERY_LEN = 256
GEODE_MESSAGE_SECONDS = 5
# Read timeouts (100ms each) per cursor blink phase.
GEODE_BLINK_TICKS = 5

LOG_ENV_VAR = "GEODE_LOG"

# Syntax highlight types.
HL_NORMAL = 0
HL_COMMENT = 1
HL_KEYWORD1 = 2
HL_KEYWORD2 = 3
HL_STRING = 4
HL_NUMBER = 5
HL_OPERATOR = 6
HL_MATCH = 7

HL_HIGHLIGHT_NUMBERS = 1 << 0
HL_HIGHLIGHT_STRINGS = 1 << 1

HL_COLORS = {
    HL_COMMENT: 36,
    HL_KEYWORD1: 33,
    HL_KEYWORD2: 32,
    HL_STRING: 35,
    HL_NUMBER: 31,
    HL_OPERATOR: 93,
    HL_MATCH: 34,
}
DEFAULT_COLOR = 39

SEPARATORS = ",.()+-/*=~%<>[]{};:&|!^?"

# Key actions.
CTRL_C = 3
CTRL_F = 6
CTRL_H = 8
TAB = 9
CTRL_L = 12
ENTER = 13
CTRL_Q = 17
CTRL_S = 19
ESC = 27
BACKSPACE = 127

ARROW_LEFT = 1000
ARROW_RIGHT = 1001
ARROW_UP = 1002
ARROW_DOWN = 1003
DEL_KEY = 1004
HOME_KEY = 1005
END_KEY = 1006
PAGE_UP = 1007
PAGE_DOWN = 1008
INSERT_KEY = 1009

CSI_SIMPLE_MAP = {
    ord("A"): ARROW_UP,
    ord("B"): ARROW_DOWN,
    ord("C"): ARROW_RIGHT,
    ord("D"): ARROW_LEFT,
    ord("H"): HOME_KEY,
    ord("F"): END_KEY,
}
CSI_TILDE_MAP = {
    ord("1"): HOME_KEY,
    ord("2"): INSERT_KEY,
    ord("3"): DEL_KEY,
    ord("4"): END_KEY,
    ord("5"): PAGE_UP,
    ord("6"): PAGE_DOWN,
    ord("7"): HOME_KEY,
    ord("8"): END_KEY,
}
SS3_SIMPLE_MAP = {
    ord("H"): HOME_KEY,
    ord("F"): END_KEY,
}

ANSI_HIDE_CURSOR = "\x1b[?25l"
ANSI_SHOW_CURSOR = "\x1b[?25h"
ANSI_CURSOR_HOME = "\x1b[H"
ANSI_CLEAR_SCREEN = "\x1b[2J"
ANSI_CLEAR_LINE = "\x1b[K"
ANSI_INVERT_ON = "\x1b[7m"
ANSI_RESET = "\x1b[m"
ANSI_CURSOR_QUERY = b"\x1b[6n"
ANSI_CURSOR_FAR_CORNER = b"\x1b[999C\x1b[999B"
