"""Enemy component: walks to the dome, attacks it and takes damage."""

import math
from enum import IntEnum

import numpy as np

from sandbox.component import Component, ComponentType
from sandbox.mathutil import normalize, quat_rotate
from sandbox.transform import Transform

_UP = np.array([0.0, 1.0, 0.0])
_BACK = np.array([0.0, 0.0, -1.0])


class EnemyType(IntEnum):
    """Kinds of enemy; the values index per-type tables."""

    ANT = 0
    BEETLE = 1
    WASP = 2


class EnemyState(IntEnum):
    """Animation state an enemy is in."""

    SPAWN = 0
    WALK = 1
    ATTACK = 2
    DEAD = 3


class Enemy(Component):
    """An attacker that moves towards its destination and damages the dome.

    Collaborators are plain attributes:
    ``dome`` has ``take_damage(amount)``; ``on_attack``, ``on_hit``,
    ``on_killed`` and ``on_die`` are optional callables taking the enemy.
    """

    component_type = ComponentType.ENEMY_AI

    def __init__(self):
        super().__init__()
        self.is_avoiding = False
        self.is_at_walls = False
        self.should_stay = False

        self.destination = np.zeros(3)
        self.enemy_type = EnemyType.ANT
        self.speed = 5.0
        self.hp = 100.0
        self.damage = 5.0
        self.attack_frequency = 3.0
        self.size = 2.0

        self.distance_to_stop = 0.1
        self.slalom_time = 0.0
        self.attack_timer = self.attack_frequency
        self.slalom_amplitude = 1.0
        self.slalom_frequency = 1.0

        self.state = EnemyState.WALK
        self.to_delete = False

        self.dome = None
        self.on_attack = None
        self.on_hit = None
        self.on_killed = None
        self.on_die = None

    def serialize(self):
        return {"enemySize": self.size}

    def deserialize(self, data):
        if "enemySize" in data:
            self.size = float(data["enemySize"])
        super().deserialize(data)

    def walk_to_destination(self, dt, destination=None):
        """Step towards the destination with a sideways slalom."""
        if self.is_at_walls:
            return
        if destination is not None:
            self.destination = np.array(destination, dtype=float).reshape(3)

        transform = self._require_transform()
        current = transform.position
        if float(np.linalg.norm(self.destination - current)) <= self.distance_to_stop:
            return
        if self.should_stay:
            return

        self.slalom_time += dt
        side = math.sin(self.slalom_time * self.slalom_frequency) * self.slalom_amplitude
        rotation = transform.rotation
        side_vector = normalize(np.cross(quat_rotate(rotation, _UP),
                                         quat_rotate(rotation, _BACK))) * side

        forward = Transform.move_towards(current, self.destination, self.speed * dt) - current
        movement = forward + side_vector * dt
        movement[1] = 0.0

        transform.look_at(movement)
        transform.set_position(current + movement)

    def take_damage(self, amount):
        """Lose ``amount`` hit points; at zero or below the enemy is killed."""
        self.hp -= amount
        if self.on_hit is not None:
            self.on_hit(self)
        if self.hp <= 0:
            if self.enemy_type == EnemyType.WASP:
                self.die()
            if self.on_killed is not None:
                self.on_killed(self)
            self.state = EnemyState.DEAD

    def die(self):
        """Detach the owner node from its parent and report the death."""
        node = self.owner_node
        if node is not None and node.parent is not None:
            node.parent.remove_child(node)
        if self.on_die is not None:
            self.on_die(self)

    def attack_dome(self, dt):
        """Hit the dome whenever the attack timer has run out."""
        if not self.is_at_walls:
            return
        if self.attack_timer >= self.attack_frequency:
            if self.on_attack is not None:
                self.on_attack(self)
            if self.dome is not None:
                self.dome.take_damage(self.damage)
            self.attack_timer = 0.0
        else:
            self.attack_timer += dt

    def enemy_ai(self, dt):
        """Per-frame behaviour driven by the enemies manager."""
        if self.state == EnemyState.DEAD and self.to_delete:
            self.die()
            return
        if self.state not in (EnemyState.DEAD, EnemyState.SPAWN):
            self.attack_dome(dt)
            self.walk_to_destination(dt)

    def set_stats(self, enemy_type, speed, hp, damage, attack_frequency, size):
        self.enemy_type = EnemyType(enemy_type)
        self.speed = float(speed)
        self.hp = float(hp)
        self.damage = float(damage)
        self.attack_frequency = float(attack_frequency)
        self.size = float(size)