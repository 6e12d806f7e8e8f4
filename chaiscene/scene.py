"""Game objects, scenes and the scene manager, plus the render commands they emit."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeVar

import numpy as np

from chaiscene.components import (
    Component,
    Controller,
    ControllerComponent,
    LightComponent,
    RenderableComponent,
    TransformComponent,
)

C = TypeVar("C", bound=Component)


class RenderCommandType(enum.Enum):
    """What a render command asks the renderer to do."""

    DRAW_MESH = enum.auto()
    SET_VIEWPORT = enum.auto()
    CLEAR = enum.auto()
    SET_SCISSOR = enum.auto()
    SET_LIGHTS = enum.auto()


@dataclass
class LightData:
    """A light as the renderer sees it; cone values are cosines of the angles."""

    type: int = 0
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    direction: np.ndarray = field(default_factory=lambda: np.zeros(3))
    color: tuple[float, float, float] = (0.0, 0.0, 0.0)
    intensity: float = 0.0
    range: float = 0.0
    attenuation: tuple[float, float, float] = (0.0, 0.0, 0.0)
    inner_cone: float = 0.0
    outer_cone: float = 0.0
    enabled: int = 0


@dataclass
class RenderCommand:
    """A single instruction for the renderer."""

    type: RenderCommandType
    mesh: Any = None
    material: Any = None
    transform: np.ndarray = field(default_factory=lambda: np.identity(4))
    view_matrix: np.ndarray = field(default_factory=lambda: np.identity(4))
    projection_matrix: np.ndarray = field(default_factory=lambda: np.identity(4))
    viewport: Any = None
    lights: list[LightData] = field(default_factory=list)


class _Collector(Protocol):
    def submit(self, command: RenderCommand) -> None: ...


class GameObject:
    """An entity made of components, always starting with a transform."""

    def __init__(self) -> None:
        self._components: list[Component] = []
        self._controller_component: ControllerComponent | None = None
        self.add_component(TransformComponent, self)

    @property
    def components(self) -> tuple[Component, ...]:
        return tuple(self._components)

    def add_component(self, component_cls: type[C], owner: Any = None) -> C:
        """Create a component of the given class, keep it and return it."""
        component = component_cls(owner)
        self._components.append(component)
        return component

    def get_component(self, component_cls: type[C]) -> C | None:
        """Return the first component that is an instance of component_cls."""
        return next((c for c in self._components if isinstance(c, component_cls)), None)

    def add_controller(self, controller_cls: type, *args: Any, **kwargs: Any) -> Controller:
        if self._controller_component is None:
            self._controller_component = ControllerComponent(self)
        return self._controller_component.add_controller(controller_cls, *args, **kwargs)

    def get_controller(self, key: type | str) -> Controller | None:
        if self._controller_component is None:
            return None
        return self._controller_component.get_controller(key)

    def remove_controller(self, controller_cls: type) -> bool:
        if self._controller_component is None:
            return False
        return self._controller_component.remove_controller(controller_cls)

    def has_controllers(self) -> bool:
        return self._controller_component is not None and self._controller_component.has_controllers()

    def set_controllers_enabled(self, enabled: bool) -> None:
        if self._controller_component is not None:
            self._controller_component.set_all_enabled(enabled)

    def collect_renderables(self, collector: _Collector) -> None:
        """Submit a draw command for every renderable component."""
        for component in self._components:
            if not isinstance(component, RenderableComponent):
                continue
            transform = self.get_component(TransformComponent)
            collector.submit(
                RenderCommand(
                    type=RenderCommandType.DRAW_MESH,
                    mesh=component.mesh,
                    material=component.materials[0] if component.materials else None,
                    transform=transform.world_matrix() if transform is not None else np.identity(4),
                )
            )

    def update(self, delta_time: float) -> None:
        for component in list(self._components):
            component.update(delta_time)
        if self._controller_component is not None:
            self._controller_component.update(delta_time)


class Scene:
    """Holds the game objects that persist from frame to frame."""

    def __init__(self) -> None:
        self._objects: list[GameObject] = []

    @property
    def objects(self) -> tuple[GameObject, ...]:
        return tuple(self._objects)

    def add_game_object(self, game_object: GameObject) -> None:
        self._objects.append(game_object)

    def collect_renderables(self, collector: _Collector) -> None:
        for game_object in self._objects:
            game_object.collect_renderables(collector)

    def collect_lights(self, collector: _Collector) -> None:
        """Submit one command carrying every enabled light, if there is any."""
        command = RenderCommand(type=RenderCommandType.SET_LIGHTS)
        for game_object in self._objects:
            light = game_object.get_component(LightComponent)
            if light is None or not light.enabled:
                continue
            transform = game_object.get_component(TransformComponent)
            command.lights.append(
                LightData(
                    type=int(light.type),
                    position=transform.world_position(),
                    direction=transform.forward(),
                    color=tuple(light.color),
                    intensity=light.intensity,
                    range=light.range,
                    attenuation=tuple(light.attenuation),
                    inner_cone=math.cos(math.radians(light.inner_cone)),
                    outer_cone=math.cos(math.radians(light.outer_cone)),
                    enabled=1 if light.enabled else 0,
                )
            )
        if command.lights:
            collector.submit(command)

    def objects_with_component(self, component_cls: type) -> list[GameObject]:
        return [obj for obj in self._objects if obj.get_component(component_cls) is not None]

    def update(self, delta_time: float) -> None:
        for game_object in self._objects:
            game_object.update(delta_time)


class SceneManager:
    """Keeps named scenes and tracks which one is active."""

    def __init__(self) -> None:
        self._scenes: dict[str, Scene] = {}
        self.primary_scene: Scene | None = None

    @property
    def scenes(self) -> dict[str, Scene]:
        return dict(self._scenes)

    def add_scene(self, name: str, scene: Scene) -> None:
        """Register a scene; a name already taken keeps its original scene."""
        self._scenes.setdefault(name, scene)

    def set_active_scene(self, name: str) -> Scene | None:
        """Make the named scene active and return it; an unknown name clears it."""
        self.primary_scene = self._scenes.get(name)
        return self.primary_scene

    def update(self, delta_time: float) -> None:
        for scene in self._scenes.values():
            scene.update(delta_time)