"""Viewports inside windows and the manager that keeps them sized."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

from chaiscene.input import InputEvent, InputEventType


@dataclass
class ViewportDesc:
    """Name, rectangle and clear settings of a viewport."""

    name: str = ""
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
    clear_color: tuple[float, float, float, float] = (0.2, 0.3, 0.3, 1.0)
    clear_depth: bool = True
    clear_stencil: bool = False


class Viewport:
    """A rectangle of a window that a camera renders into."""

    def __init__(self, view_id: int, desc: ViewportDesc, window: int) -> None:
        self.id = view_id
        self.desc = dataclasses.replace(desc)
        self.parent_window = window
        # Viewports reference cameras; they never own them.
        self.camera: Any = None

    @property
    def name(self) -> str:
        return self.desc.name

    def set_rect(self, x: int, y: int, width: int, height: int) -> None:
        self.desc.x = x
        self.desc.y = y
        self.desc.width = width
        self.desc.height = height

    def set_clear_color(self, r: float, g: float, b: float, a: float = 1.0) -> None:
        self.desc.clear_color = (r, g, b, a)

    def rect(self) -> tuple[int, int, int, int]:
        """Return (x, y, width, height)."""
        return (self.desc.x, self.desc.y, self.desc.width, self.desc.height)

    def __repr__(self) -> str:
        return f"Viewport(id={self.id!r}, name={self.name!r}, rect={self.rect()!r})"


class ViewportManager:
    """Creates viewports, hands out ids from 1 and resizes them with their window."""

    def __init__(self) -> None:
        self._viewports: list[Viewport] = []
        self._id_to_index: dict[int, int] = {}
        self._next_id = 1

    def create_viewport(self, window_id: int, desc: ViewportDesc) -> int:
        viewport_id = self._next_id
        self._next_id += 1
        self._id_to_index[viewport_id] = len(self._viewports)
        self._viewports.append(Viewport(viewport_id, desc, window_id))
        return viewport_id

    def get_viewport(self, viewport_id: int) -> Viewport | None:
        index = self._id_to_index.get(viewport_id)
        return None if index is None else self._viewports[index]

    def all_viewports(self) -> list[Viewport]:
        return list(self._viewports)

    def assign_camera_to_viewport(self, viewport_id: int, camera: Any) -> None:
        viewport = self.get_viewport(viewport_id)
        if viewport is None:
            raise KeyError(viewport_id)
        viewport.camera = camera

    def handle_event(self, event: InputEvent) -> None:
        """Resize every viewport of a window whose framebuffer changed size."""
        if event.type is not InputEventType.FRAMEBUFFER_RESIZE:
            return
        for viewport in self._viewports:
            if viewport.parent_window == event.window_id:
                viewport.set_rect(viewport.desc.x, viewport.desc.y, event.width, event.height)