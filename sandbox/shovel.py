"""Component that keeps the shovel in front of the camera and animates it."""

import numpy as np

from sandbox.component import Component, ComponentType
from sandbox.mathutil import normalize, quat_from_matrix, quat_to_euler


def _mix(a, b, t):
    return a + (b - a) * t


def _clamp01(value):
    return min(1.0, max(0.0, value))


class ShovelController(Component):
    """Places the shovel relative to the camera and plays dig and hide animations."""

    component_type = ComponentType.SHOVEL_CONTROLLER

    def __init__(self, ground_level=0.0, shovel=None):
        super().__init__()
        self.shovel = shovel
        self.hide_y = ground_level - 0.8

        self.forward_offset = 2.0
        self.horizontal_offset = 1.3
        self.vertical_offset = -1.5

        self.play_dig_anim = False
        self.dig_animation_timer = 0.0
        self.dig_animation_time = 0.2
        self.actual_degree = 0.0
        self.max_degree = 60.0
        self.min_degree = 0.0

        self.play_hide_anim = False
        self.play_show_anim = False
        self.visibility_animation_timer = 0.0
        self.visibility_animation_time = 0.5
        self.actual_visibility_offset = 0.0
        self.visibility_offset = 3.0
        self.is_hidden = False

    def start_dig(self):
        self.play_dig_anim = True

    def real_update(self, dt, player_y, camera_position, front, right, up):
        """Run the animations for this frame and place the shovel."""
        if player_y >= self.hide_y and not self.is_hidden and not self.play_show_anim:
            self.play_hide_anim = True
        elif player_y < self.hide_y and self.is_hidden and not self.play_hide_anim:
            self.play_show_anim = True

        if self.play_dig_anim:
            self.play_dig_animation(dt)
        if self.play_hide_anim:
            self.play_hide_shovel(dt)
        if self.play_show_anim:
            self.play_show_shovel(dt)

        self.set_pos_and_rot(camera_position, front, right, up)

    def play_hide_shovel(self, dt):
        if self.visibility_animation_timer >= self.visibility_animation_time:
            return
        self.visibility_animation_timer += dt
        if self.visibility_animation_timer < self.visibility_animation_time:
            t = _clamp01(self.visibility_animation_timer / self.visibility_animation_time)
            self.actual_visibility_offset = _mix(self.actual_visibility_offset, self.visibility_offset, t)
        else:
            self.actual_visibility_offset = self.visibility_offset
            self.visibility_animation_timer = 0.0
            self.play_hide_anim = False
            self.is_hidden = True

    def play_show_shovel(self, dt):
        if self.visibility_animation_timer >= self.visibility_animation_time:
            return
        self.visibility_animation_timer += dt
        if self.visibility_animation_timer < self.visibility_animation_time:
            t = _clamp01(self.visibility_animation_timer / self.visibility_animation_time)
            self.actual_visibility_offset = _mix(self.actual_visibility_offset, 0.0, t)
        else:
            self.actual_visibility_offset = 0.0
            self.visibility_animation_timer = 0.0
            self.play_show_anim = False
            self.is_hidden = False

    def play_dig_animation(self, dt):
        if self.dig_animation_timer < self.dig_animation_time:
            self.dig_animation_timer += dt
            t = _clamp01(self.dig_animation_timer / self.dig_animation_time / 2)
            if self.dig_animation_timer < self.dig_animation_time / 2:
                self.actual_degree = _mix(self.actual_degree, self.max_degree, t)
            else:
                self.actual_degree = _mix(self.actual_degree, self.min_degree, t)
        else:
            self.dig_animation_timer = 0.0
            self.actual_degree = 0.0
            self.play_dig_anim = False

    def set_pos_and_rot(self, camera_position, front, right, up):
        """Place the shovel from the camera position and its basis vectors."""
        if self.shovel is None:
            raise RuntimeError("no shovel transform set")
        forward = normalize(front)
        right = normalize(right)
        up = normalize(up)

        position = (np.asarray(camera_position, dtype=float)
                    + forward * self.forward_offset
                    + right * self.horizontal_offset
                    + up * self.vertical_offset)
        position = position + up * -self.actual_visibility_offset
        self.shovel.set_position(position)

        basis = np.eye(4)
        basis[:3, 0] = right
        basis[:3, 1] = up
        basis[:3, 2] = -forward
        self.shovel.set_rotation(quat_from_matrix(basis))

        euler = np.degrees(quat_to_euler(self.shovel.rotation))
        self.shovel.set_rotation_euler((euler[0] - self.actual_degree, euler[1], euler[2]))