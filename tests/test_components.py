import math

import numpy as np
import pytest

from chaiscene.components import (
    CameraComponent,
    Component,
    Controller,
    ControllerComponent,
    LightComponent,
    LightType,
    MeshComponent,
    PhongMaterial,
    RenderableComponent,
    TransformComponent,
)


class Owner:
    def __init__(self):
        self.components = []

    def attach(self, component):
        self.components.append(component)
        return component

    def get_component(self, cls):
        return next((c for c in self.components if isinstance(c, cls)), None)


class Dummy(Controller):
    controller_type = "Dummy"

    def __init__(self, game_object, label="dummy"):
        super().__init__(game_object)
        self.label = label
        self.steps = []

    def update(self, delta_time):
        self.steps.append(delta_time)


class Unnamed(Controller):
    def update(self, delta_time):
        pass


def unit(v):
    v = np.asarray(v, dtype=float)
    return v / np.linalg.norm(v)


def test_component_keeps_owner():
    owner = Owner()
    assert Component(owner).game_object is owner
    assert Component().game_object is None


def test_default_transform_axes():
    t = TransformComponent()
    assert np.allclose(t.world_matrix(), np.identity(4))
    assert np.allclose(t.forward(), [0.0, 0.0, -1.0])
    assert np.allclose(t.right(), np.cross(t.forward(), t.up()))


def test_first_transform_has_no_parent_second_does():
    owner = Owner()
    first = owner.attach(TransformComponent(owner))
    second = owner.attach(TransformComponent(owner))
    assert first.parent is None
    assert second.parent is first


def test_child_follows_parent_position():
    owner = Owner()
    parent = owner.attach(TransformComponent(owner))
    child = owner.attach(TransformComponent(owner))
    parent.position = (1.0, 2.0, 3.0)
    assert np.allclose(child.world_position(), parent.position)


def test_world_position_is_translation_of_world_matrix():
    t = TransformComponent()
    t.position = (3.0, -1.0, 2.0)
    t.scale = (2.0, 2.0, 2.0)
    assert np.allclose(t.world_matrix()[:3, 3], t.position)
    assert np.allclose(t.world_position(), t.position)


def test_look_at_points_forward_at_target():
    t = TransformComponent()
    t.position = (1.0, 2.0, 3.0)
    target = np.array([4.0, 6.0, 3.0])
    t.look_at(target, (0.0, 1.0, 0.0))
    assert np.allclose(t.forward(), unit(target - t.position))
    assert np.dot(t.up(), t.forward()) == pytest.approx(0.0, abs=1e-9)


def test_look_at_under_rotated_parent():
    owner = Owner()
    parent = owner.attach(TransformComponent(owner))
    child = owner.attach(TransformComponent(owner))
    angle = 0.8
    parent.rotation = (math.cos(angle / 2), 0.0, math.sin(angle / 2), 0.0)
    parent.position = (1.0, 0.0, -2.0)
    target = np.array([5.0, 1.0, 4.0])
    child.look_at(target, (0.0, 1.0, 0.0))
    assert np.allclose(child.forward(), unit(target - child.world_position()))


def test_camera_view_matrix_centres_on_transform():
    owner = Owner()
    transform = owner.attach(TransformComponent(owner))
    camera = owner.attach(CameraComponent(owner))
    transform.position = (1.0, 2.0, 3.0)
    view = camera.view_matrix()
    assert np.allclose(view @ np.append(transform.position, 1.0), [0.0, 0.0, 0.0, 1.0])


def test_camera_update_stores_view_matrix():
    owner = Owner()
    transform = owner.attach(TransformComponent(owner))
    camera = owner.attach(CameraComponent(owner))
    transform.position = (0.5, 1.0, -2.0)
    transform.look_at((3.0, 0.0, 0.0), (0.0, 1.0, 0.0))
    camera.update(0.016)
    assert np.allclose(camera.camera.view_matrix, camera.view_matrix())


def test_camera_without_transform_has_identity_view():
    assert np.allclose(CameraComponent().view_matrix(), np.identity(4))


def test_camera_projection_delegates():
    camera = CameraComponent()
    camera.camera.aspect = 1.5
    assert np.allclose(camera.projection_matrix(), camera.camera.projection_matrix())


def test_light_defaults():
    light = LightComponent()
    assert light.type is LightType.DIRECTIONAL
    assert light.intensity == 0.7
    assert (light.inner_cone, light.outer_cone) == (12.5, 17.5)
    assert light.attenuation == (1.0, 0.09, 0.032)
    assert light.enabled is True


def test_mesh_component_starts_with_phong_material():
    mesh = MeshComponent()
    assert len(mesh.materials) == 1
    assert mesh.materials[0] == PhongMaterial()
    assert mesh.mesh is None


def test_renderable_starts_empty():
    renderable = RenderableComponent()
    assert renderable.materials == []
    assert renderable.mesh is None


def test_controller_is_abstract():
    with pytest.raises(TypeError):
        Controller(None)


def test_add_and_get_controller():
    owner = Owner()
    component = ControllerComponent(owner)
    dummy = component.add_controller(Dummy, label="first")
    assert dummy.game_object is owner
    assert dummy.label == "first"
    assert component.get_controller(Dummy) is dummy
    assert component.get_controller("Dummy") is dummy
    assert component.get_controller("Missing") is None
    assert len(component) == 1
    assert component.has_controllers()


def test_unnamed_controller_is_not_found_by_name():
    component = ControllerComponent(Owner())
    unnamed = component.add_controller(Unnamed)
    assert component.get_controller(Unnamed) is unnamed
    assert component.get_controller("") is None


def test_add_rejects_non_controller():
    component = ControllerComponent(Owner())
    with pytest.raises(TypeError):
        component.add_controller(TransformComponent)


def test_remove_controller():
    component = ControllerComponent(Owner())
    component.add_controller(Dummy)
    assert component.remove_controller(Dummy) is True
    assert component.get_controller("Dummy") is None
    assert component.get_controller(Dummy) is None
    assert len(component) == 0
    assert component.remove_controller(Dummy) is False


def test_update_skips_disabled_controllers():
    component = ControllerComponent(Owner())
    dummy = component.add_controller(Dummy)
    component.update(0.5)
    component.set_all_enabled(False)
    component.update(0.25)
    assert dummy.steps == [0.5]
    component.set_all_enabled(True)
    component.update(0.25)
    assert dummy.steps == [0.5, 0.25]