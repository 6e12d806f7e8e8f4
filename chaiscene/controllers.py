"""Controllers that move game objects in response to input."""

from __future__ import annotations

import math
from typing import Any, Callable, Protocol

import numpy as np

from chaiscene.components import CameraComponent, Controller, TransformComponent
from chaiscene.input import InputEvent, InputEventType, Key

_SPACE = 32
# The initial yaw and pitch are derived with this approximation of pi.
_DEGREES_PER_RADIAN = 180.0 / 3.14
_PITCH_LIMIT = 89.0


class _InputSource(Protocol):
    def subscribe(self, handler: Callable[[InputEvent], None]) -> int: ...

    def unsubscribe(self, handler_id: int) -> None: ...

    def is_key_pressed(self, key: int) -> bool: ...

    def mouse_delta(self) -> tuple[float, float]: ...


class CameraController(Controller):
    """Fly camera: W/S/A/D move, Space/C rise and sink, drag the mouse to look.

    ``input_source`` provides ``subscribe``, ``unsubscribe``, ``is_key_pressed``
    and ``mouse_delta``.
    """

    controller_type = "CameraController"

    def __init__(self, game_object: Any, input_source: _InputSource) -> None:
        super().__init__(game_object)
        transform = game_object.get_component(TransformComponent)
        if transform is None:
            raise ValueError("a camera controller needs a TransformComponent")
        self.camera_component = game_object.get_component(CameraComponent)
        self.transform_component: TransformComponent = transform
        self.move_speed = 5.0
        self.mouse_sensitivity = 0.1
        self.mouse_captured = False
        self._input = input_source

        forward = transform.forward()
        self.yaw = math.atan2(-forward[0], forward[2]) * _DEGREES_PER_RADIAN
        self.pitch = math.asin(max(-1.0, min(1.0, forward[1]))) * _DEGREES_PER_RADIAN
        self._handler_id: int | None = input_source.subscribe(self.handle_input)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        """Camera controllers ignore requests to enable or disable them."""

    def handle_input(self, event: InputEvent) -> None:
        if event.type is InputEventType.MOUSE_BUTTON_PRESS:
            self.mouse_captured = True
        elif event.type is InputEventType.MOUSE_BUTTON_RELEASE:
            self.mouse_captured = False

    def update(self, delta_time: float) -> None:
        self.process_movement(delta_time)
        if self.mouse_captured:
            delta_x, delta_y = self._input.mouse_delta()
            if delta_x != 0.0 or delta_y != 0.0:
                self.process_mouse_look(delta_x, delta_y)

    def process_movement(self, delta_time: float) -> None:
        velocity = self.move_speed * delta_time
        transform = self.transform_component
        pos = transform.world_position()
        forward = transform.forward()
        right = transform.right()
        pressed = self._input.is_key_pressed

        if pressed(Key.KEY_W):
            pos = pos + forward * velocity
        if pressed(Key.KEY_S):
            pos = pos - forward * velocity
        if pressed(Key.KEY_A):
            pos = pos - right * velocity
        if pressed(Key.KEY_D):
            pos = pos + right * velocity
        if pressed(_SPACE):
            pos[1] += velocity
        if pressed(Key.KEY_C):
            pos[1] -= velocity

        transform.position = pos

    def process_mouse_look(self, delta_x: float, delta_y: float) -> None:
        self.yaw += delta_x * self.mouse_sensitivity
        self.pitch += delta_y * self.mouse_sensitivity
        self.pitch = max(-_PITCH_LIMIT, min(_PITCH_LIMIT, self.pitch))

        yaw = math.radians(self.yaw)
        pitch = math.radians(self.pitch)
        direction = np.array([
            -math.sin(yaw) * math.cos(pitch),
            math.sin(pitch),
            math.cos(yaw) * math.cos(pitch),
        ])
        pos = self.transform_component.world_position()
        self.transform_component.look_at(pos + direction, (0.0, 1.0, 0.0))

    def close(self) -> None:
        """Stop listening for input; later calls do nothing."""
        if self._handler_id is not None:
            self._input.unsubscribe(self._handler_id)
            self._handler_id = None