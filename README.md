# sandbox

Game-logic core for a dome-defence sandbox: a scene graph of nodes and
components, hierarchical transforms built on quaternions, per-frame input
and clock state, and the enemy wave system that spawns ants, beetles and
wasps and walks them to the dome.

Everything works on plain numbers and `numpy` arrays, so it can be driven
from any game loop or from tests.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `sandbox.mathutil`: vector, quaternion and matrix helpers. Quaternions
  are `(w, x, y, z)` arrays, matrices are 4x4 arrays applied to column
  vectors. Functions: `normalize` (raises `ValueError` for a zero vector),
  `quat_identity`, `quat_multiply`, `quat_rotate`, `quat_from_euler`,
  `quat_to_euler`, `quat_to_matrix`, `quat_from_matrix`, `angle_axis`,
  `translation_matrix`, `scale_matrix`.
- `sandbox.transform`: `Transform` with position, rotation and scale, an
  optional parent, a dirty-tracked local matrix (`ctm`) and a global matrix
  (`global_ctm`). Methods include `set_position`, `set_position_axis`,
  `add_position`, `set_rotation`, `set_rotation_euler` (degrees),
  `add_rotation`, `set_scale` (vector or one number), `look_at`,
  `look_at_position`, `combine`, `update_transform`, `global_position` and
  `debug` (logs through `logging`). Static helpers:
  `Transform.apply_transformation`, `Transform.calculate_transform_matrix`,
  `Transform.origin` and `Transform.move_towards`.
- `sandbox.component`: the `ComponentType` enumeration (the integer values
  stored in scene data) and the `Component` base class with lifecycle hooks
  `initiate`, `init`, `input`, `update(dt)`, `render` and `render_shadows`,
  plus `serialize` / `deserialize` of `componentType` and `componentId`.
- `sandbox.frame_clock`: `FrameClock`, which turns a time source (by default
  a monotonic clock) into per-frame deltas from `tick()`, capped at
  `max_delta` (0.06 s by default).
- `sandbox.input_state`: `KeyAction` and `InputState`, which record key and
  mouse-button events and answer `key_down`, `key_held`, `key_pressed`,
  `key_released`, `mouse_button_down` and `mouse_pressed`; track the cursor
  with `on_mouse_move`, convert to and from centred `[-1, 1]` coordinates
  with `set_mouse_fixed_pos` / `mouse_fixed_pos`; and roll state over with
  `end_frame()`. Key codes outside `0..348` and buttons outside `0..2`
  raise `ValueError`.
- `sandbox.node`: `Node`, the scene graph (children, components, `init`,
  `input`, `update`, `render`, `render_shadows`, `update_transforms`,
  `remove_child`, `move_child_to_end`, `get_component`, `get_components`,
  `serialize`, `Node.from_dict`), and `ComponentRegistry`, which maps
  component types to factories and keeps built components by id.
- `sandbox.rotate`: `Rotate`, spinning its owner by `speed` degrees per
  second about a local axis; `reset()` sets the rotation to (0, -60, 0)
  degrees; `paused` stops it.
- `sandbox.top_layer_snap`: `TopLayerSnap`, setting its owner's height to a
  `floor_height(position)` callable plus `y_offset`, once per `update`
  (after which it disables itself) or on `reset()`.
- `sandbox.shovel`: `ShovelController`, placing a shovel transform in front
  of the camera from the camera position and basis vectors, and playing the
  dig (`start_dig`) and hide/show animations as the player moves above or
  below ground.
- `sandbox.enemy`: `Enemy`, `EnemyType` and `EnemyState`. An enemy walks to
  its destination with a sideways slalom, hits a `dome` object's
  `take_damage` on a timer once at the walls, and reports through the
  optional callbacks `on_attack`, `on_hit`, `on_killed` and `on_die`.
- `sandbox.spawning`: `EnemyStats`, `default_enemy_stats`,
  `default_rounds` (ten rounds of ant/beetle/wasp counts plus endless-mode
  weights), `choose_endless_type` and `RoundSpawner`, which decides how many
  enemies of each kind to spawn as a round progresses, what to spawn in
  endless mode, and where on an arc around the dome.
- `sandbox.enemies_manager`: `Dome` (position, radius, ground level, hp)
  and `EnemiesManager`, which spawns enemy nodes under a root node, steers
  them away from each other, marks those reaching the wall in
  `attack_markers`, and calls `on_round_won` once a finished round has no
  enemies left.

## Examples

Transforms in a scene graph:

```python
import numpy as np
from sandbox.transform import Transform
from sandbox.node import Node

root = Node("root", 0)
child = Node("box", 1)
root.add_child(child)
child.transform.set_position(np.array([1.0, 2.0, 3.0]))

root.update_transforms(Transform.origin())
print(child.transform.global_position())  # [1. 2. 3.]
```

Building a scene from data:

```python
from sandbox.component import ComponentType
from sandbox.node import ComponentRegistry, Node
from sandbox.rotate import Rotate

registry = ComponentRegistry()
registry.register(ComponentType.ROTATE, Rotate)

scene = {
    "NodeName": "root",
    "NodeID": 0,
    "components": [{"componentType": 14, "componentId": 1, "speed": 30.0}],
    "children": [{"NodeName": "child", "NodeID": 1}],
}
root = Node.from_dict(scene, registry)
root.update(0.5)  # the Rotate component turns the root by 15 degrees
```

A frame of the wave system:

```python
from sandbox.enemies_manager import Dome, EnemiesManager

manager = EnemiesManager(Dome(), None, None, None)
manager.update(dt=0.016, defending=True, progress=0.1, round_number=0, endless=False)
print(manager.count_valid())
```

## What the package does not do

There is no drawing, window, audio or game loop here. The `render` and
`render_shadows` hooks only pass world matrices down the scene graph;
`InputState` and `FrameClock` must be fed events and times by the caller;
`Node.from_dict` and `Node.serialize` work on dictionaries and do not read
or write scene files. Only the components listed above exist, so a
`ComponentRegistry` has to be given a factory for every component type a
scene uses.