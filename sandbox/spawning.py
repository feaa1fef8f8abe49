"""Enemy statistics, round tables and the logic deciding what to spawn."""

import math
import random
from dataclasses import dataclass

from sandbox.enemy import EnemyType


@dataclass
class EnemyStats:
    """Base statistics of one kind of enemy."""

    speed: float = 1.0
    hp: float = 1.0
    damage: float = 1.0
    attack_frequency: float = 1.0
    size: float = 1.0
    type: EnemyType = EnemyType.ANT


def default_enemy_stats():
    """Return the stats of ants, beetles and wasps, indexed by EnemyType."""
    return [
        EnemyStats(7.0, 3, 0.5, 0.6, 2.0, EnemyType.ANT),
        EnemyStats(3.0, 30, 5, 1.5, 4.0, EnemyType.BEETLE),
        EnemyStats(10.0, 3, 1, 0.45, 2.0, EnemyType.WASP),
    ]


def default_rounds():
    """Return per-round counts of (ants, beetles, wasps); the last entry holds endless-mode weights."""
    return [
        (10, 0, 0),
        (25, 1, 0),
        (50, 3, 1),
        (80, 6, 3),
        (115, 10, 6),
        (155, 15, 10),
        (200, 21, 15),
        (250, 28, 21),
        (305, 36, 28),
        (365, 45, 36),
        (0.85, 0.05, 0.1),
    ]


def choose_endless_type(weights, value):
    """Pick an enemy type for a random ``value`` in [0, 1) using cumulative weights."""
    ant, beetle, _ = weights
    if value < ant:
        return EnemyType.ANT
    if value < ant + beetle:
        return EnemyType.BEETLE
    return EnemyType.WASP


class RoundSpawner:
    """Decides how many enemies of each type to spawn as a round progresses."""

    def __init__(self, rounds=None, spawn_span=0.5, rng=None):
        self.rounds = default_rounds() if rounds is None else list(rounds)
        self.spawn_span = spawn_span
        self.rng = random.Random() if rng is None else rng
        self.spawned = (0, 0, 0)
        self.finished = False
        self.round_random = 0.0
        self.endless_timer = 0.0
        self.endless_delay = 3.0
        self.endless_delay_min = 0.1
        self.endless_delay_step = 0.025

    def start(self):
        """Begin spawning a new round at a fresh random angle offset."""
        self.finished = False
        self.round_random = self.rng.random()

    def random_scale(self):
        """Return a random size factor for a new enemy."""
        return self.rng.uniform(0.7, 1.3)

    def spawns_for_progress(self, round_number, progress):
        """Return how many (ants, beetles, wasps) to spawn now for the round's progress."""
        if self.finished:
            return (0, 0, 0)
        portion = min(1.0, max(0.0, progress / self.spawn_span))
        spawns = tuple(int(count * portion) for count in self.rounds[round_number])
        if spawns == self.spawned:
            return (0, 0, 0)
        diff = tuple(new - old for new, old in zip(spawns, self.spawned))
        self.spawned = spawns
        if portion == 1.0:
            self.finished = True
        return tuple(max(0, d) for d in diff)

    def endless_tick(self, dt, round_number):
        """Advance the endless timer; return the type to spawn now, or None."""
        if self.finished:
            return None
        self.endless_timer += dt
        if self.endless_delay > self.endless_delay_min:
            self.endless_delay -= self.endless_delay_step * dt
        if self.endless_timer < self.endless_delay:
            return None
        self.endless_timer = 0.0
        return choose_endless_type(self.rounds[round_number], self.rng.random())

    def random_spawn_position(self, round_number, dome_position, distance=100):
        """Return a point at ``distance`` from the dome, in an arc widening each round."""
        max_angle = math.radians(min(360.0, 90.0 * (round_number + 1)))
        angle = self.rng.uniform(0.0, max_angle)
        adjusted = math.fmod(angle + self.round_random * max_angle, 2.0 * math.pi)
        cx, cy = dome_position[0], dome_position[1]
        return (cx + distance * math.cos(adjusted), cy + distance * math.sin(adjusted))