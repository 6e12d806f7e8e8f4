# chaiscene

This package is the scene layer of a small game engine. It uses `numpy` for the math.

## Modules

- `chaiscene.scene` holds `GameObject`, `Scene` and `SceneManager`, and the render commands they produce: `RenderCommand`, `RenderCommandType` and `LightData`.
  - Every `GameObject` starts with a `TransformComponent`.
  - `get_component(cls)` returns the first component that is an instance of `cls`.
  - `SceneManager.add_scene` keeps the first scene registered under a name.
  - `set_active_scene` sets `primary_scene`. An unknown name sets it to `None`.
- `chaiscene.components` holds the components and the controller base.
  - `TransformComponent` stores a position, a rotation quaternion and a scale. Its parent is the first transform the owner already has. It can give you local and world matrices and its world position and rotation, its `forward`/`right`/`up` vectors, and it can `look_at` a target.
  - `CameraComponent` wraps a `Camera`. It derives a view matrix from the owner's transform.
  - `LightComponent` and `LightType` describe a light.
  - `RenderableComponent` and `MeshComponent` hold a mesh and its materials. A `MeshComponent` starts with one `PhongMaterial`.
  - `Controller` is an abstract base. Subclasses implement `update`.
  - `ControllerComponent` holds controllers. You can look them up by class or by their `controller_type` name.
- `chaiscene.controllers` holds `CameraController`, a fly camera.
  - W, S, A and D move it, Space raises it and C lowers it.
  - Mouse look is active between a mouse button press event and a release event. Pitch is clamped to ±89°.
  - The `input_source` you pass it must provide `subscribe`, `unsubscribe`, `is_key_pressed` and `mouse_delta`.
  - `close()` unsubscribes the controller.
- `chaiscene.geometry` holds the matrix and quaternion helpers `perspective`, `look_at`, `translation`, `scaling`, `quat_multiply`, `quat_inverse`, `quat_rotate`, `quat_to_matrix` and `quat_from_matrix`, and the `Camera` class.
  - Matrices are 4x4 and act on column vectors (`m @ v`).
  - Quaternions are ordered `(w, x, y, z)`.
- `chaiscene.input` holds `Key`, `MouseButton`, `KeyEvent`, `InputState`, `InputEventType`, `InputEvent` and `FramebufferResizeEvent`.
- `chaiscene.window` holds `WindowDesc`, `WindowData`, `Window`, the abstract `WindowSystem` and `WindowManager`.
  - `WindowManager` initialises its system when it is created.
  - `close()` shuts the system down, and `WindowManager` can be used as a context manager.
  - `is_done()` is true once every window has been closed.
- `chaiscene.viewport` holds `ViewportDesc`, `Viewport` and `ViewportManager`.
  - `ViewportManager` hands out viewport ids starting from 1.
  - When it receives a `FramebufferResizeEvent`, it resizes every viewport of that window.
- `chaiscene.objloader` holds `ObjLoader`, `MtlLoader`, `Vertex`, `Mesh` and `MeshAsset`.

## Example

```python
from chaiscene.scene import Scene, SceneManager, GameObject
from chaiscene.components import CameraComponent, TransformComponent, LightComponent


class Commands(list):
    def submit(self, command):
        self.append(command)


camera_object = GameObject()
camera_object.add_component(CameraComponent, camera_object)
camera_object.get_component(TransformComponent).look_at((0.0, 0.0, -5.0), (0.0, 1.0, 0.0))

lamp = GameObject()
lamp.add_component(LightComponent, lamp)

scene = Scene()
scene.add_game_object(camera_object)
scene.add_game_object(lamp)

manager = SceneManager()
manager.add_scene("main", scene)
manager.set_active_scene("main")
manager.update(1.0 / 60.0)

commands = Commands()
scene.collect_lights(commands)       # one SET_LIGHTS command holding the lamp
scene.collect_renderables(commands)  # one DRAW_MESH command per renderable component
```

A collector is any object that has a `submit(command)` method.

`Scene.collect_lights` submits a command only when at least one light is enabled. The cone values it reports are the cosines of the angles.

`Camera.projection_matrix()` passes the stored `fov` to `perspective` unchanged, and `perspective` reads it as radians. The camera's `aspect` starts at `0.0`, and `perspective` raises `ValueError` for an aspect of zero. Set `aspect` before you ask for a projection.

## Loading models

```python
from chaiscene.objloader import ObjLoader, MtlLoader

loader = ObjLoader()
if loader.can_load("obj"):
    asset = loader.load("models/cube.obj")
    print(len(asset.mesh.vertices), len(asset.mesh.indices))
    print(asset.material_libraries)

material = MtlLoader().load("models/cube.mtl")
```

`ObjLoader.load`:

- splits polygons into triangle fans;
- merges identical vertices;
- flips the V texture coordinate;
- records the names of the materials it finds in the files that `mtllib` refers to.

It raises `ValueError` on malformed lines and on indices that are out of range.

`MtlLoader.load` reads only the first material in the file and returns it as a `PhongMaterial`. Colours that are all zero, a shininess that is not positive and a dissolve of 1 are left as `None`. The loader raises `ValueError` if the file defines no material.

## What this package does not do

- It has no native window backend. To use `WindowManager`, implement `WindowSystem` for your platform.
- It has no renderer. Render commands are plain data for you to consume.
- It has no input system. Supply your own input source to `CameraController`, and feed events to `ViewportManager.handle_event`.

## Installation and tests

```
pip install ".[test]"
pytest
```