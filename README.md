# climbkit

The simulation core of a small first-person climbing game. It keeps the state
of the level, the player, the camera and the lights, and applies the game's
movement and collision rules. A renderer reads the resulting matrices, bounding
boxes and shader uniform values.

## Modules

- `climbkit.geometry`: quaternions in `(w, x, y, z)` form. It provides
  `quat_from_euler`, `rotate`, `quat_to_euler`, `perspective`, `look_at`,
  `compute_final_view`, `project_vector_on_plane`, `clamp_angle_to_value` and
  `clip_angle_to_bounds`.
- `climbkit.aabb`: `AABB` boxes with `process`, `update(model_matrix)`,
  `center`, `half_widths` and `line_vertices`. It also has
  `check_collision(a, b)`, which returns a `Collision` (with `depth` and
  `normal`) for the shallowest overlapping axis, or `None` when the boxes do
  not touch.
- `climbkit.transform`: `Transform` holds a translation, a rotation in
  degrees and a scale, with `set_*` and `adjust_*` methods and
  `set_from_matrix`. `decompose_matrix` splits an affine matrix into
  translation, quaternion and scale.
- `climbkit.lights`: the light types `DirectionalLight`, `PointLight` and
  `TorchLight`. A `LightManager` collects them, and its `uniforms()` returns
  every shader uniform name mapped to its value, including the shadow-map
  texture units.
- `climbkit.camera`: a `Camera` with mouse look (`mode_cam` 0 or 1) or
  keyboard flight (`mode_cam` 2). Input comes in as a cursor position and a
  collection of pressed `Key`s. `start_transition` and `transition` give eased
  moves along the view direction, using the curves in `InterpolationMode`
  (see `interpolate`). The module also defines `CameraMode` and `next_mode`.
- `climbkit.mesh`: `Vertex`, `Material`, `TextureInfo`, `Mesh`, `MeshEntry`
  and `Model`. `Mesh.sampler_bindings()` gives the material uniforms and the
  texture unit numbering, and `Model.compute_bounding_box()` encloses all of
  the model's meshes.
- `climbkit.plane`: a grid `Plane` mesh with random vertex heights, seeded
  by an optional `seed`. It provides bilinear `height_at(x, z)` and
  `heights()`.
- `climbkit.physics`: `RigidBody` handles gravity, air resistance, ground
  friction, trampolines (restitution) and ladders. The `PhysicsEngine` steps
  the player, which is its first entity, against every other entity and
  reports ladder and moving-block contacts through `ContactKind`.
- `climbkit.scene_node`: `SceneNode` joins a mesh or model, a `Transform` and
  a `RigidBody`, and has parent and child links. `nodes_from_model` creates
  one node per mesh entry.
- `climbkit.player`: `Player` turns pressed keys into velocity. This covers
  walking, sprinting with a wider field of view, ladder climbing and jumping.
  The player keeps the camera at eye height.
- `climbkit.scene`: `Scene` builds the level from a map `Model`. It flags
  ladder, trampoline and ice materials, adds the level's lights and the
  player torch, and registers collidable nodes with a `PhysicsEngine`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Collision between two boxes:

```python
from climbkit.aabb import AABB, check_collision

a = AABB((0.0, 0.0, 0.0), (1.0, 1.0, 1.0))
b = AABB((0.5, 0.9, 0.5), (1.5, 2.0, 1.5))

hit = check_collision(a, b)
if hit is not None:
    print(hit.depth, hit.normal)
```

Camera flight with the keyboard:

```python
from climbkit.camera import Camera, Key

camera = Camera()
camera.init()
camera.mode_cam = 2
camera.update(1 / 60, cursor=None, keys={Key.W, Key.LEFT})
print(camera.position, camera.front())
```

Terrain height:

```python
from climbkit.plane import Plane

plane = Plane(grid_x=4, grid_z=4, size=8, height_scale=2, seed=1)
print(plane.height_at(3.0, 5.0))
```

A scene with its lights:

```python
from climbkit.player import Player
from climbkit.scene import Scene

scene = Scene(player=Player())
scene.setup_scene()
print(scene.lights.uniforms()["nb_point_lights"])
```

## What it does not do

- There is no rendering. The package draws nothing, compiles no shaders and
  creates no shadow maps. It only produces the matrices, line vertices and
  uniform values that a renderer would use.
- It loads no files. Meshes and models are built in code from `Vertex` lists
  and indices, and `TextureInfo` only records a texture's kind and path.
- There is no window, no event loop and no command to run. Input reaches the
  camera and player as a cursor position and a set of `Key`s, supplied by the
  caller.