"""Components attached to game objects, and the controllers that drive them."""

from __future__ import annotations

import abc
import enum
from dataclasses import dataclass
from typing import Any, Iterable

import numpy as np

from chaiscene.geometry import (
    IDENTITY_QUAT,
    Camera,
    look_at,
    quat_from_matrix,
    quat_inverse,
    quat_multiply,
    quat_rotate,
    quat_to_matrix,
    scaling,
    translation,
)


class Component:
    """Base of everything attached to a game object."""

    def __init__(self, owner: Any = None) -> None:
        self.game_object = owner

    def update(self, delta_time: float) -> None:
        """Advance the component by delta_time seconds; does nothing by default."""


class TransformComponent(Component):
    """Position, rotation and scale, relative to the owner's first transform."""

    def __init__(self, owner: Any = None) -> None:
        super().__init__(owner)
        self.parent: TransformComponent | None = (
            owner.get_component(TransformComponent) if owner is not None else None
        )
        self._position = np.zeros(3)
        self._rotation = IDENTITY_QUAT.copy()
        self._scale = np.ones(3)

    @property
    def position(self) -> np.ndarray:
        return self._position

    @position.setter
    def position(self, value: Iterable[float]) -> None:
        self._position = np.asarray(value, dtype=float).copy()

    @property
    def rotation(self) -> np.ndarray:
        return self._rotation

    @rotation.setter
    def rotation(self, value: Iterable[float]) -> None:
        self._rotation = np.asarray(value, dtype=float).copy()

    @property
    def scale(self) -> np.ndarray:
        return self._scale

    @scale.setter
    def scale(self, value: Iterable[float]) -> None:
        self._scale = np.asarray(value, dtype=float).copy()

    def local_matrix(self) -> np.ndarray:
        rotation = np.identity(4)
        rotation[:3, :3] = quat_to_matrix(self._rotation)
        return translation(self._position) @ rotation @ scaling(self._scale)

    def world_matrix(self) -> np.ndarray:
        if self.parent is not None:
            return self.parent.world_matrix() @ self.local_matrix()
        return self.local_matrix()

    def up(self) -> np.ndarray:
        return quat_rotate(self.world_rotation(), (0.0, 1.0, 0.0))

    def forward(self) -> np.ndarray:
        return quat_rotate(self.world_rotation(), (0.0, 0.0, -1.0))

    def right(self) -> np.ndarray:
        return quat_rotate(self.world_rotation(), (1.0, 0.0, 0.0))

    def world_position(self) -> np.ndarray:
        return self.world_matrix()[:3, 3].copy()

    def world_rotation(self) -> np.ndarray:
        if self.parent is not None:
            return quat_multiply(self.parent.world_rotation(), self._rotation)
        return self._rotation.copy()

    def look_at(self, target: Iterable[float], world_up: Iterable[float]) -> None:
        """Turn so that forward points from the world position to target."""
        world_pos = self.world_position()
        forward = np.asarray(target, dtype=float) - world_pos
        forward = forward / np.linalg.norm(forward)
        right = np.cross(forward, np.asarray(world_up, dtype=float))
        right = right / np.linalg.norm(right)
        up = np.cross(right, forward)
        rotation = quat_from_matrix(np.column_stack((right, up, -forward)))
        if self.parent is not None:
            rotation = quat_multiply(quat_inverse(self.parent.world_rotation()), rotation)
        self._rotation = rotation


class CameraComponent(Component):
    """Places a camera at the owner's transform."""

    def __init__(self, owner: Any = None) -> None:
        super().__init__(owner)
        self.camera = Camera()

    def _transform(self) -> TransformComponent | None:
        if self.game_object is None:
            return None
        return self.game_object.get_component(TransformComponent)

    def view_matrix(self) -> np.ndarray:
        transform = self._transform()
        if transform is None:
            return np.identity(4)
        pos = transform.world_position()
        return look_at(pos, pos + transform.forward(), transform.up())

    def projection_matrix(self) -> np.ndarray:
        return self.camera.projection_matrix()

    def update(self, delta_time: float) -> None:
        transform = self._transform()
        if transform is not None:
            pos = transform.world_position()
            self.camera.view_matrix = look_at(pos, pos + transform.forward(), transform.up())


class LightType(enum.IntEnum):
    DIRECTIONAL = 0
    POINT = 1
    SPOT = 2


class LightComponent(Component):
    """A light source; cone angles are in degrees."""

    def __init__(self, owner: Any = None) -> None:
        super().__init__(owner)
        self.type = LightType.DIRECTIONAL
        self.color = (1.0, 1.0, 1.0)
        self.intensity = 0.7
        # Point and spot lights.
        self.range = 10.0
        self.attenuation = (1.0, 0.09, 0.032)  # constant, linear, quadratic
        # Spot lights.
        self.inner_cone = 12.5
        self.outer_cone = 17.5
        self.enabled = True


@dataclass
class PhongMaterial:
    """Phong shading parameters; None leaves the shader's own default."""

    diffuse: tuple[float, float, float] | None = None
    specular: tuple[float, float, float] | None = None
    ambient: tuple[float, float, float] | None = None
    shininess: float | None = None
    transparency: float | None = None


class RenderableComponent(Component):
    """A component that can be drawn: a mesh and its materials."""

    def __init__(self, owner: Any = None) -> None:
        super().__init__(owner)
        self.mesh: Any = None
        self.materials: list[Any] = []


class MeshComponent(RenderableComponent):
    """A renderable mesh, starting with one Phong material."""

    def __init__(self, owner: Any = None) -> None:
        super().__init__(owner)
        self.materials.append(PhongMaterial())


class Controller(abc.ABC):
    """Behaviour attached to a game object and run every frame while enabled."""

    controller_type: str = ""

    def __init__(self, game_object: Any) -> None:
        self.game_object = game_object
        self._enabled = True

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = bool(value)

    @abc.abstractmethod
    def update(self, delta_time: float) -> None:
        """Advance the controller by delta_time seconds."""


class ControllerComponent(Component):
    """Holds a game object's controllers, found by class or by name."""

    def __init__(self, owner: Any) -> None:
        super().__init__(owner)
        self._controllers: list[Controller] = []
        self._by_type: dict[type, Controller] = {}
        self._by_name: dict[str, Controller] = {}

    @property
    def controllers(self) -> tuple[Controller, ...]:
        return tuple(self._controllers)

    def add_controller(self, controller_cls: type, *args: Any, **kwargs: Any) -> Controller:
        """Create a controller for the owner and keep it; return the new controller."""
        if not (isinstance(controller_cls, type) and issubclass(controller_cls, Controller)):
            raise TypeError(f"{controller_cls!r} is not a Controller subclass")
        controller = controller_cls(self.game_object, *args, **kwargs)
        self._by_type[controller_cls] = controller
        if controller.controller_type:
            self._by_name[controller.controller_type] = controller
        self._controllers.append(controller)
        return controller

    def get_controller(self, key: type | str) -> Controller | None:
        """Look a controller up by its class or by its type name."""
        if isinstance(key, str):
            return self._by_name.get(key)
        return self._by_type.get(key)

    def remove_controller(self, controller_cls: type) -> bool:
        controller = self._by_type.pop(controller_cls, None)
        if controller is None:
            return False
        for name, named in self._by_name.items():
            if named is controller:
                del self._by_name[name]
                break
        self._controllers = [c for c in self._controllers if c is not controller]
        return True

    def update(self, delta_time: float) -> None:
        for controller in self._controllers:
            if controller.enabled:
                controller.update(delta_time)

    def set_all_enabled(self, enabled: bool) -> None:
        for controller in self._controllers:
            controller.enabled = enabled

    def has_controllers(self) -> bool:
        return bool(self._controllers)

    def __len__(self) -> int:
        return len(self._controllers)