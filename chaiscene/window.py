"""Windows, the platform window system interface and the window manager."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Any


@dataclass
class WindowDesc:
    """Parameters for creating a window. A position of -1 centres it."""

    title: str = "Untitled Window"
    width: int = 1280
    height: int = 720
    x: int = -1
    y: int = -1
    resizable: bool = True
    decorated: bool = True
    fullscreen: bool = False
    vsync: bool = True
    samples: int = 0


@dataclass
class WindowData:
    """What a platform window carries back to the engine in its callbacks."""

    window: Window | None = None
    manager: WindowManager | None = None


class Window:
    """A single window and the native handle behind it."""

    def __init__(self, desc: WindowDesc | None = None, window_id: int = 0) -> None:
        self.id = window_id
        self.desc = desc if desc is not None else WindowDesc()
        self.data = WindowData(window=self)
        self.native_window: Any = None

    def __repr__(self) -> str:
        return f"Window(id={self.id!r}, title={self.desc.title!r})"


class WindowSystem(abc.ABC):
    """A platform backend that creates and drives native windows."""

    @abc.abstractmethod
    def initialize(self) -> None:
        """Start the platform layer."""

    @abc.abstractmethod
    def shutdown(self) -> None:
        """Stop the platform layer."""

    @abc.abstractmethod
    def poll_events(self) -> None:
        """Dispatch pending platform events."""

    @abc.abstractmethod
    def get_proc_address(self) -> Any:
        """Return the loader used to resolve graphics functions."""

    def swap_buffers(self, native_window: Any) -> None:
        """Present the back buffer of a window.

        Backends without a presentation step only count the frames asked for.
        """
        self.frames_presented = getattr(self, "frames_presented", 0) + 1

    @abc.abstractmethod
    def create_window(self, desc: WindowDesc, manager: WindowManager) -> Window:
        """Create a window described by desc, owned by manager."""

    @abc.abstractmethod
    def destroy_window(self, native_window: Any) -> None:
        """Destroy a native window."""

    @abc.abstractmethod
    def destroy_all_windows(self) -> None:
        """Destroy every native window."""


class WindowManager:
    """Owns the open windows and drives them through a window system."""

    def __init__(self, system: WindowSystem) -> None:
        self._system = system
        self._windows: list[Window] = []
        self._closed = False
        system.initialize()

    @property
    def windows(self) -> list[Window]:
        return list(self._windows)

    def create_window(self, desc: WindowDesc | None = None) -> int:
        """Create a window and return its id."""
        window = self._system.create_window(desc if desc is not None else WindowDesc(), self)
        self._windows.append(window)
        return window.id

    def request_close(self, window_id: int) -> None:
        """Destroy the window with this id and forget every window that has it."""
        window = self.find_window(window_id)
        if window is not None:
            self._system.destroy_window(window.native_window)
        self._windows = [w for w in self._windows if w.id != window_id]

    def is_done(self) -> bool:
        """True once no window is left open."""
        return not self._windows

    def update(self) -> None:
        """Poll platform events, then present every window."""
        self._system.poll_events()
        for window in self._windows:
            self._system.swap_buffers(window.native_window)

    def find_window(self, window_id: int) -> Window | None:
        return next((w for w in self._windows if w.id == window_id), None)

    def close(self) -> None:
        """Shut the window system down; later calls do nothing."""
        if not self._closed:
            self._closed = True
            self._system.shutdown()

    def __enter__(self) -> WindowManager:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()