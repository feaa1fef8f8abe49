import numpy as np
import pytest

from sandbox.component import ComponentType
from sandbox.enemy import Enemy, EnemyState, EnemyType
from sandbox.node import Node


class _Dome:
    def __init__(self):
        self.hits = []

    def take_damage(self, amount):
        self.hits.append(amount)


def _placed_enemy(position=(0.0, 0.0, 0.0)):
    root = Node("root")
    node = Node("Enemy1")
    root.add_child(node)
    enemy = Enemy()
    node.add_component(enemy)
    node.transform.set_position(position)
    return root, node, enemy


def test_type_is_enemy_ai():
    assert Enemy().type == ComponentType.ENEMY_AI


def test_serialize_round_trip():
    enemy = Enemy()
    enemy.size = 3.5
    data = enemy.serialize()
    assert data == {"enemySize": 3.5}
    other = Enemy()
    other.deserialize(dict(data, componentId=7))
    assert other.size == 3.5
    assert other.id == 7


def test_set_stats():
    enemy = Enemy()
    enemy.set_stats(EnemyType.BEETLE, 3.0, 30, 5, 1.5, 4.0)
    assert enemy.enemy_type is EnemyType.BEETLE
    assert (enemy.speed, enemy.hp, enemy.damage) == (3.0, 30.0, 5.0)
    assert (enemy.attack_frequency, enemy.size) == (1.5, 4.0)


def test_take_damage_reduces_hp_and_reports_hit():
    enemy = Enemy()
    hits = []
    enemy.on_hit = hits.append
    enemy.take_damage(10)
    assert enemy.hp == 90
    assert hits == [enemy]
    assert enemy.state == EnemyState.WALK


def test_lethal_damage_marks_dead():
    root, node, enemy = _placed_enemy()
    killed = []
    enemy.on_killed = killed.append
    enemy.set_stats(EnemyType.ANT, 7.0, 3, 0.5, 0.6, 2.0)
    enemy.take_damage(3)
    assert enemy.state == EnemyState.DEAD
    assert killed == [enemy]
    assert node in root.children


def test_killed_wasp_dies_at_once():
    root, node, enemy = _placed_enemy()
    died = []
    enemy.on_die = died.append
    enemy.set_stats(EnemyType.WASP, 10.0, 3, 1, 0.45, 2.0)
    enemy.take_damage(5)
    assert node not in root.children
    assert died == [enemy]


def test_attack_needs_walls():
    enemy = Enemy()
    dome = _Dome()
    enemy.dome = dome
    enemy.attack_dome(0.1)
    assert dome.hits == []


def test_attack_hits_then_waits():
    enemy = Enemy()
    dome = _Dome()
    enemy.dome = dome
    enemy.is_at_walls = True
    enemy.attack_dome(0.5)
    assert dome.hits == [enemy.damage]
    assert enemy.attack_timer == 0.0
    enemy.attack_dome(0.5)
    assert dome.hits == [enemy.damage]
    assert enemy.attack_timer == pytest.approx(0.5)


def test_walk_moves_towards_destination_on_ground_plane():
    _, node, enemy = _placed_enemy()
    target = np.array([0.0, 0.0, 50.0])
    before = np.linalg.norm(target - node.transform.position)
    enemy.walk_to_destination(0.1, target)
    after_pos = node.transform.position
    assert np.linalg.norm(target - after_pos) < before
    assert after_pos[1] == 0.0
    np.testing.assert_allclose(enemy.destination, target)


def test_walk_stops_at_walls_or_when_staying():
    _, node, enemy = _placed_enemy()
    enemy.is_at_walls = True
    enemy.walk_to_destination(0.1, (0.0, 0.0, 50.0))
    np.testing.assert_allclose(node.transform.position, np.zeros(3))
    enemy.is_at_walls = False
    enemy.should_stay = True
    enemy.walk_to_destination(0.1, (0.0, 0.0, 50.0))
    np.testing.assert_allclose(node.transform.position, np.zeros(3))


def test_walk_without_transform_raises():
    with pytest.raises(RuntimeError):
        Enemy().walk_to_destination(0.1, (1.0, 0.0, 0.0))


def test_enemy_ai_removes_dead_enemy_when_flagged():
    root, node, enemy = _placed_enemy()
    enemy.state = EnemyState.DEAD
    enemy.to_delete = True
    enemy.enemy_ai(0.1)
    assert node not in root.children


def test_enemy_ai_idle_while_spawning():
    _, node, enemy = _placed_enemy()
    enemy.destination = np.array([0.0, 0.0, 50.0])
    enemy.state = EnemyState.SPAWN
    enemy.enemy_ai(0.1)
    np.testing.assert_allclose(node.transform.position, np.zeros(3))
    enemy.state = EnemyState.WALK
    enemy.enemy_ai(0.1)
    assert node.transform.position[2] > 0.0