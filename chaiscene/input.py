"""Input state and the input events passed between windows and views."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class Key(enum.IntEnum):
    """Keyboard keys, numbered by their ASCII upper-case letter."""

    KEY_A = 65
    KEY_B = 66
    KEY_C = 67
    KEY_D = 68
    KEY_E = 69
    KEY_F = 70
    KEY_G = 71
    KEY_H = 72
    KEY_I = 73
    KEY_J = 74
    KEY_K = 75
    KEY_L = 76
    KEY_M = 77
    KEY_N = 78
    KEY_O = 79
    KEY_P = 80
    KEY_Q = 81
    KEY_R = 82
    KEY_S = 83
    KEY_T = 84
    KEY_U = 85
    KEY_V = 86
    KEY_W = 87
    KEY_X = 88
    KEY_Y = 89
    KEY_Z = 90


class MouseButton(enum.IntEnum):
    """Mouse buttons."""

    LEFT = 0
    RIGHT = 1
    MIDDLE = 2


@dataclass(frozen=True)
class KeyEvent:
    """A single key press."""

    pressed: Key


@dataclass
class InputState:
    """Snapshot of the mouse and the keys and buttons held down."""

    mouse_pos: tuple[float, float] = (0.0, 0.0)
    mouse_diff: tuple[float, float] = (0.0, 0.0)
    keys: set[Key] = field(default_factory=set)
    mouse_buttons: set[MouseButton] = field(default_factory=set)


class InputEventType(enum.Enum):
    """Kinds of input event a window can emit."""

    KEY_PRESS = enum.auto()
    KEY_RELEASE = enum.auto()
    MOUSE_BUTTON_PRESS = enum.auto()
    MOUSE_BUTTON_RELEASE = enum.auto()
    MOUSE_MOVE = enum.auto()
    FRAMEBUFFER_RESIZE = enum.auto()


@dataclass(frozen=True)
class InputEvent:
    """An input event raised by the window with the given id."""

    type: InputEventType
    window_id: int


@dataclass(frozen=True)
class FramebufferResizeEvent(InputEvent):
    """The framebuffer of a window changed size."""

    type: InputEventType = field(init=False, default=InputEventType.FRAMEBUFFER_RESIZE)
    width: int
    height: int