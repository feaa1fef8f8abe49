import random

import numpy as np
import pytest

from sandbox.enemies_manager import Dome, EnemiesManager
from sandbox.enemy import EnemyState, EnemyType
from sandbox.mathutil import quat_rotate
from sandbox.node import Node
from sandbox.spawning import RoundSpawner, default_enemy_stats


def make_manager(rounds=None, radius=5.0, ground=0.0):
    dome = Dome(position=(0.0, 0.0), radius=radius, ground_level=ground)
    spawner = RoundSpawner(rounds=rounds, spawn_span=0.5, rng=random.Random(7))
    return EnemiesManager(dome, Node("root"), spawner)


def test_closest_dome_position_is_on_ring():
    manager = make_manager(radius=10.0)
    enemy = manager.spawn_enemy(EnemyType.ANT, 1.0, (30.0, 40.0))
    point = manager.closest_dome_position(enemy)
    assert np.hypot(point[0], point[2]) == pytest.approx(10.0 + 4.5)
    assert point[1] == pytest.approx(enemy.owner_position[1])
    direction = np.array([point[0], point[2]]) / np.hypot(point[0], point[2])
    assert np.allclose(direction, np.array([30.0, 40.0]) / 50.0)


def test_spawn_enemy_places_node_and_stats():
    manager = make_manager(ground=2.0)
    enemy = manager.spawn_enemy(EnemyType.BEETLE, 1.2, (50.0, 0.0))
    node = enemy.owner_node
    assert node.name == "Enemy1"
    assert node in manager.root.children
    assert np.allclose(node.transform.position, [50.0, 2.0, 0.0])
    assert np.allclose(node.transform.scale, [1.2, 1.2, 1.2])
    beetle = default_enemy_stats()[EnemyType.BEETLE]
    assert enemy.size == pytest.approx(beetle.size * 1.2)
    assert enemy.speed == pytest.approx(beetle.speed)
    assert enemy.enemy_type == EnemyType.BEETLE
    assert manager.count_valid() == 1
    assert manager.spawn_enemy(EnemyType.ANT, 1.0, (0.0, 50.0)).owner_node.name == "Enemy2"


def test_wasp_spawns_above_ground():
    manager = make_manager(ground=1.0)
    wasp = manager.spawn_enemy(EnemyType.WASP, 1.0, (50.0, 0.0))
    ant = manager.spawn_enemy(EnemyType.ANT, 1.0, (0.0, 50.0))
    assert wasp.owner_position[1] - ant.owner_position[1] == pytest.approx(5.0)


def test_spawned_enemy_faces_destination():
    manager = make_manager()
    enemy = manager.spawn_enemy(EnemyType.ANT, 1.0, (30.0, 20.0))
    facing = quat_rotate(enemy.owner_rotation, (0.0, 0.0, 1.0))
    look = enemy.destination - enemy.owner_position
    look[1] = 0.0
    assert np.allclose(facing, look / np.linalg.norm(look), atol=1e-6)


def test_check_if_at_walls_marks_attack():
    manager = make_manager()
    enemy = manager.spawn_enemy(EnemyType.ANT, 1.0, (50.0, 0.0))
    manager.check_if_at_walls(enemy)
    assert enemy.is_at_walls is False
    enemy.owner_transform.set_position(manager.closest_dome_position(enemy))
    manager.check_if_at_walls(enemy)
    assert enemy.is_at_walls is True
    assert enemy.state == EnemyState.ATTACK
    assert manager.attack_markers == [enemy]


def test_avoid_enemy_pushes_apart_same_kind():
    manager = make_manager()
    first = manager.spawn_enemy(EnemyType.ANT, 1.0, (50.0, 0.0))
    second = manager.spawn_enemy(EnemyType.BEETLE, 1.0, (50.5, 0.0))
    manager.avoid_enemy(first)
    assert first.is_avoiding is True
    assert first.distance_to_stop == pytest.approx(1.0)
    offset = first.destination - first.owner_position
    assert np.linalg.norm(offset) == pytest.approx(3.0)
    assert offset[0] < 0.0
    assert offset[1] == pytest.approx(0.0)
    assert second.is_avoiding is False


def test_avoid_enemy_ignores_other_kind():
    manager = make_manager()
    ant = manager.spawn_enemy(EnemyType.ANT, 1.0, (50.0, 0.0))
    manager.spawn_enemy(EnemyType.WASP, 1.0, (50.5, 0.0))
    before = ant.destination.copy()
    manager.avoid_enemy(ant)
    assert ant.is_avoiding is False
    assert ant.distance_to_stop == pytest.approx(0.1)
    assert np.array_equal(ant.destination, before)


def test_return_to_normal_destination():
    manager = make_manager()
    enemy = manager.spawn_enemy(EnemyType.ANT, 1.0, (50.0, 0.0))
    enemy.destination = enemy.owner_position + np.array([0.0, 0.0, 0.5])
    enemy.is_avoiding = True
    manager.return_to_normal_destination(enemy)
    assert np.allclose(enemy.destination, manager.closest_dome_position(enemy))
    assert enemy.is_avoiding is False


def test_remove_enemy_reports_round_won():
    manager = make_manager()
    won = []
    manager.on_round_won = lambda: won.append(True)
    enemy = manager.spawn_enemy(EnemyType.ANT, 1.0, (50.0, 0.0))
    manager.spawner.finished = True
    manager.remove_enemy(enemy)
    assert manager.count_valid() == 0
    assert manager.enemies == [None]
    assert won == [True]


def test_killed_wasp_leaves_scene():
    manager = make_manager()
    wasp = manager.spawn_enemy(EnemyType.WASP, 1.0, (50.0, 0.0))
    manager.attack_markers.append(wasp)
    wasp.take_damage(1000)
    assert wasp.owner_node not in manager.root.children
    assert manager.count_valid() == 0
    assert manager.attack_markers == []
    assert wasp.state == EnemyState.DEAD


def test_spawn_for_round_follows_progress():
    manager = make_manager(rounds=[(2, 1, 0)])
    manager.spawner.start()
    manager.spawn_for_round(0.1, False, 0.5, 0, False)
    assert manager.count_valid() == 0
    manager.spawn_for_round(0.1, True, 0.5, 0, False)
    types = sorted(e.enemy_type for e in manager.enemies)
    assert types == [EnemyType.ANT, EnemyType.ANT, EnemyType.BEETLE]
    assert manager.spawner.finished is True
    for enemy in manager.enemies:
        assert np.hypot(enemy.owner_position[0], enemy.owner_position[2]) == pytest.approx(100.0)


def test_spawn_for_round_endless():
    manager = make_manager(rounds=[(0.0, 1.0, 0.0)])
    manager.spawner.endless_delay = 0.0
    manager.spawner.endless_delay_min = 0.0
    manager.spawn_for_round(0.1, True, 0.0, 0, True)
    manager.spawn_for_round(0.1, True, 0.0, 0, True)
    assert [e.enemy_type for e in manager.enemies] == [EnemyType.BEETLE, EnemyType.BEETLE]


def test_update_moves_enemies_towards_dome():
    manager = make_manager()
    enemy = manager.spawn_enemy(EnemyType.ANT, 1.0, (50.0, 0.0))
    start = np.hypot(enemy.owner_position[0], enemy.owner_position[2])
    manager.update(0.1, False, 0.0, 0, False)
    after = np.hypot(enemy.owner_position[0], enemy.owner_position[2])
    assert after < start


def test_reset_clears_everything():
    manager = make_manager()
    first = manager.spawn_enemy(EnemyType.ANT, 1.0, (50.0, 0.0))
    manager.spawn_enemy(EnemyType.ANT, 1.0, (0.0, 50.0))
    manager.attack_markers.append(first)
    manager.spawner.finished = True
    manager.reset()
    assert manager.enemies == []
    assert manager.root.children == ()
    assert manager.attack_markers == []
    assert manager.spawner.finished is False


def test_dome_takes_damage_from_attacking_enemy():
    manager = make_manager()
    enemy = manager.spawn_enemy(EnemyType.BEETLE, 1.0, (50.0, 0.0))
    enemy.is_at_walls = True
    enemy.attack_timer = enemy.attack_frequency
    before = manager.dome.hp
    enemy.attack_dome(0.1)
    assert manager.dome.hp == pytest.approx(before - enemy.damage)