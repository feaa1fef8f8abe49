"""Keeps track of the enemies in play: spawning, steering and removal."""

import math
from dataclasses import dataclass

import numpy as np

from sandbox.enemy import Enemy, EnemyState, EnemyType
from sandbox.mathutil import angle_axis, normalize
from sandbox.node import Node
from sandbox.spawning import RoundSpawner, default_enemy_stats

_WALL_MARGIN = 4.5


@dataclass
class Dome:
    """The defended dome: centre on the ground plane (x, z), radius and health."""

    position: tuple = (0.0, 0.0)
    radius: float = 10.0
    ground_level: float = 0.0
    hp: float = 100.0

    def take_damage(self, amount):
        self.hp -= amount


class EnemiesManager:
    """Spawns enemies for each round and drives their per-frame behaviour.

    ``attack_markers`` lists the enemies currently attacking the dome, and
    ``on_round_won`` is called once the last enemy of a finished round is gone.
    """

    def __init__(self, dome, root=None, spawner=None, stats=None):
        self.dome = dome
        self.root = Node("root") if root is None else root
        self.spawner = RoundSpawner() if spawner is None else spawner
        self.stats = default_enemy_stats() if stats is None else list(stats)
        self.enemies = []
        self.attack_markers = []
        self.spawn_distance = 100
        self.next_enemy_index = 1
        self.on_round_won = None

    def closest_dome_position(self, enemy):
        """Return the point just outside the dome wall nearest to ``enemy``."""
        position = enemy.owner_position
        cx, cz = self.dome.position[0], self.dome.position[1]
        direction = normalize((position[0] - cx, position[2] - cz))
        reach = self.dome.radius + _WALL_MARGIN
        return np.array([cx + reach * direction[0], position[1], cz + reach * direction[1]])

    def spawn_enemy(self, enemy_type, scale, spawn_pos):
        """Create an enemy node under the root at ``spawn_pos`` (x, z) and return its component."""
        enemy_type = EnemyType(enemy_type)
        node = Node(f"Enemy{self.next_enemy_index}")
        self.root.add_child(node)

        height = self.dome.ground_level + (5.0 if enemy_type == EnemyType.WASP else 0.0)
        node.transform.set_position((spawn_pos[0], height, spawn_pos[1]))
        node.transform.set_scale(scale)

        enemy = Enemy()
        node.add_component(enemy)
        enemy.dome = self.dome
        enemy.on_die = self.remove_enemy
        enemy.on_killed = self._remove_marker
        enemy.destination = self.closest_dome_position(enemy)

        look = enemy.destination - node.transform.position
        look[1] = 0.0
        if float(np.linalg.norm(look)) > 0.0:
            look = normalize(look)
            yaw = math.atan2(look[0], look[2])
            node.transform.set_rotation(angle_axis(yaw, (0.0, 1.0, 0.0)))

        stats = self.stats[enemy_type]
        enemy.set_stats(stats.type, stats.speed, stats.hp, stats.damage,
                        stats.attack_frequency, stats.size * float(scale))

        self.enemies.append(enemy)
        self.next_enemy_index += 1
        return enemy

    def return_to_normal_destination(self, enemy):
        """Send an enemy back to the dome once it has reached a detour point."""
        if enemy is None:
            return
        closest = self.closest_dome_position(enemy)
        if (not np.array_equal(enemy.destination, closest)
                and float(np.linalg.norm(enemy.destination - enemy.owner_position)) <= 1.0):
            enemy.destination = closest
            enemy.is_avoiding = False

    def check_if_at_walls(self, enemy):
        """Mark an enemy that has reached the dome wall as attacking."""
        if enemy is None or enemy.is_at_walls:
            return
        closest = self.closest_dome_position(enemy)
        if float(np.linalg.norm(enemy.owner_position - closest)) < 0.5:
            enemy.is_at_walls = True
            if enemy.state != EnemyState.DEAD:
                enemy.state = EnemyState.ATTACK
            self.attack_markers.append(enemy)

    @staticmethod
    def _avoids(a, b):
        ground = (EnemyType.ANT, EnemyType.BEETLE)
        if a.enemy_type in ground and b.enemy_type in ground:
            return True
        return a.enemy_type == EnemyType.WASP and b.enemy_type == EnemyType.WASP

    def avoid_enemy(self, enemy):
        """Steer ``enemy`` away from overlapping enemies of the same kind of movement."""
        if enemy is None or enemy.is_at_walls:
            return
        own = enemy.owner_position
        avoidance = np.zeros(3)
        needs_to_avoid = False
        for other in self.enemies:
            if other is None or other is enemy or not self._avoids(enemy, other):
                continue
            to_other = other.owner_position - own
            distance = float(np.linalg.norm(to_other))
            if 0.0 < distance < (other.size + enemy.size) / 2:
                needs_to_avoid = True
                avoidance -= (to_other / distance) / distance

        if needs_to_avoid and float(np.linalg.norm(avoidance)) > 0.0:
            avoidance = normalize(avoidance)
            avoidance[1] = 0.0
            enemy.is_avoiding = True
            enemy.destination = own + avoidance * 3.0
            enemy.distance_to_stop = 1.0
        else:
            enemy.is_avoiding = False
            enemy.distance_to_stop = 0.1

    def remove_enemy(self, enemy):
        """Drop ``enemy`` from play; report a won round when none are left."""
        self.enemies = [None if e is enemy else e for e in self.enemies]
        if self.count_valid() == 0 and self.spawner.finished and self.on_round_won is not None:
            self.on_round_won()

    def count_valid(self):
        return sum(1 for enemy in self.enemies if enemy is not None)

    def _remove_marker(self, enemy):
        if enemy in self.attack_markers:
            self.attack_markers.remove(enemy)

    def _spawn_random(self, enemy_type, round_number):
        scale = self.spawner.random_scale()
        position = self.spawner.random_spawn_position(
            round_number, self.dome.position, self.spawn_distance)
        return self.spawn_enemy(enemy_type, scale, position)

    def spawn_for_round(self, dt, defending, progress, round_number, endless):
        """Spawn whatever the current round calls for at this point."""
        if not defending or self.spawner.finished:
            return
        if endless:
            enemy_type = self.spawner.endless_tick(dt, round_number)
            if enemy_type is not None:
                self._spawn_random(enemy_type, round_number)
            return
        counts = self.spawner.spawns_for_progress(round_number, progress)
        for enemy_type, count in zip(EnemyType, counts):
            for _ in range(count):
                self._spawn_random(enemy_type, round_number)

    def update(self, dt, defending, progress, round_number, endless):
        """Spawn for the round and run every live enemy for one frame."""
        self.spawn_for_round(dt, defending, progress, round_number, endless)
        for enemy in list(self.enemies):
            if enemy is None:
                continue
            enemy.enemy_ai(dt)
            if enemy not in self.enemies:
                continue
            self.return_to_normal_destination(enemy)
            self.check_if_at_walls(enemy)
            self.avoid_enemy(enemy)

    def reset(self):
        """Remove every enemy from the scene and get ready for a new round."""
        for enemy in self.enemies:
            if enemy is not None and enemy.owner_node is not None:
                self.root.remove_child(enemy.owner_node)
        self.enemies.clear()
        self.spawner.finished = False
        self.attack_markers.clear()