#!/usr/bin/env python3
"""Key constants and mappings."""
from __future__ import annotations

import curses

# Key constants
KEY_Q = ord("q")
KEY_CAP_Q = ord("Q")
KEY_HELP = ord("?")
KEY_TODAY = ord("t")
KEY_CLEAR = ord("c")
KEY_VIEW = ord("v")
KEY_MODE = ord("m")
KEY_ACCEPT = ord("a")
KEY_ESC = 27
KEY_TAB = 9
KEY_SPACE = ord(" ")
KEY_ENTER_KEYS = (10, 13, curses.KEY_ENTER)

KEY_H = ord("h")
KEY_J = ord("j")
KEY_K = ord("k")
KEY_L = ord("l")

KEY_CAP_H = ord("H")
KEY_CAP_L = ord("L")

KEY_PREV = ord("[")
KEY_NEXT = ord("]")
KEY_RANGE_PREV = ord("{")
KEY_RANGE_NEXT = ord("}")


__all__ = [
    "KEY_Q",
    "KEY_CAP_Q",
    "KEY_HELP",
    "KEY_TODAY",
    "KEY_CLEAR",
    "KEY_VIEW",
    "KEY_MODE",
    "KEY_ACCEPT",
    "KEY_ESC",
    "KEY_TAB",
    "KEY_SPACE",
    "KEY_ENTER_KEYS",
    "KEY_H",
    "KEY_J",
    "KEY_K",
    "KEY_L",
    "KEY_CAP_H",
    "KEY_CAP_L",
    "KEY_PREV",
    "KEY_NEXT",
    "KEY_RANGE_PREV",
    "KEY_RANGE_NEXT",
]
