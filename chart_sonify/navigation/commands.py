"""
Commands - The closed set of navigation inputs and their default keys.

Raw key capture belongs to the host UI; this module only translates
DOM-style key names ("ArrowRight", "PageUp", " ") into commands.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class Command(Enum):
    """Discrete navigation commands."""
    STEP_RIGHT = "step_right"
    STEP_LEFT = "step_left"
    JUMP_HOME = "jump_home"
    JUMP_END = "jump_end"
    GROUP_UP = "group_up"
    GROUP_DOWN = "group_down"
    REPLAY = "replay"
    SPEED_UP = "speed_up"
    SPEED_DOWN = "speed_down"
    PLAY_ALL_RIGHT = "play_all_right"
    PLAY_ALL_LEFT = "play_all_left"
    JUMP_TO_MINIMUM = "jump_to_minimum"
    JUMP_TO_MAXIMUM = "jump_to_maximum"
    JUMP_FORWARD_TENTH = "jump_forward_tenth"
    JUMP_BACKWARD_TENTH = "jump_backward_tenth"
    NEXT_STAT = "next_stat"
    PREVIOUS_STAT = "previous_stat"
    HELP = "help"


# (key, shift, ctrl) -> command
KEY_BINDINGS: dict[tuple[str, bool, bool], Command] = {
    ("ArrowRight", False, False): Command.STEP_RIGHT,
    ("ArrowLeft", False, False): Command.STEP_LEFT,
    ("ArrowRight", True, False): Command.PLAY_ALL_RIGHT,
    ("ArrowLeft", True, False): Command.PLAY_ALL_LEFT,
    ("ArrowRight", False, True): Command.JUMP_FORWARD_TENTH,
    ("ArrowLeft", False, True): Command.JUMP_BACKWARD_TENTH,
    ("ArrowUp", False, False): Command.NEXT_STAT,
    ("ArrowDown", False, False): Command.PREVIOUS_STAT,
    ("Home", False, False): Command.JUMP_HOME,
    ("End", False, False): Command.JUMP_END,
    ("PageUp", False, False): Command.GROUP_UP,
    ("PageDown", False, False): Command.GROUP_DOWN,
    (" ", False, False): Command.REPLAY,
    ("q", False, False): Command.SPEED_DOWN,
    ("e", False, False): Command.SPEED_UP,
    ("[", False, False): Command.JUMP_TO_MINIMUM,
    ("]", False, False): Command.JUMP_TO_MAXIMUM,
    ("h", False, False): Command.HELP,
}

HOTKEYS: tuple[tuple[str, str], ...] = (
    ("Left and Right arrows", "move between points"),
    ("Shift + Left and Right arrows", "play all points in that direction"),
    ("Control + Left and Right arrows", "move by a tenth of the group"),
    ("Up and Down arrows", "change statistic"),
    ("Home and End", "go to first and last point"),
    ("Page Up and Page Down", "change group"),
    ("Left and Right brackets", "go to minimum and maximum"),
    ("Space", "replay current point"),
    ("Q and E", "slower and faster play speed"),
    ("H", "hear these hotkeys"),
)


def command_for_key(key: str, shift: bool = False, ctrl: bool = False) -> Optional[Command]:
    """Translate a key press into a command, None for unbound keys."""
    binding = KEY_BINDINGS.get((key, shift, ctrl))
    if binding is None and len(key) == 1:
        binding = KEY_BINDINGS.get((key.lower(), False, ctrl))
    return binding


def parse_key(key_spec: str) -> tuple[str, bool, bool]:
    """Parse 'Shift+ArrowRight' / 'Ctrl+ArrowLeft' / 'Space' into a key tuple."""
    parts = key_spec.split("+") if key_spec != "+" else [key_spec]
    key = parts[-1]
    modifiers = {part.lower() for part in parts[:-1]}
    if key.lower() == "space":
        key = " "
    return key, "shift" in modifiers, bool(modifiers & {"ctrl", "control"})


def help_text() -> str:
    return ". ".join(f"{keys}: {action}" for keys, action in HOTKEYS) + "."
