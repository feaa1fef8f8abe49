"""Keyboard and mouse state tracked between frames."""

from enum import IntEnum

KEY_COUNT = 349
MOUSE_BUTTON_COUNT = 3


class KeyAction(IntEnum):
    """Key and button actions as reported by the windowing layer."""

    RELEASE = 0
    PRESS = 1
    REPEAT = 2


class InputState:
    """Tracks pressed, held and released keys, mouse buttons and the cursor."""

    def __init__(self, screen_width, screen_height):
        self.screen_width = screen_width
        self.screen_height = screen_height
        self._old_pressed = [False] * KEY_COUNT
        self._pressed = [False] * KEY_COUNT
        self._held = [False] * KEY_COUNT
        self._mouse_previous = [False] * MOUSE_BUTTON_COUNT
        self._mouse_current = [False] * MOUSE_BUTTON_COUNT
        self._last_keys = []
        self.mouse_pos = (screen_width / 2.0, screen_height / 2.0)
        self.mouse_offset = (0.0, 0.0)
        self.first_mouse = True

    @staticmethod
    def _check_key(key):
        if not 0 <= key < KEY_COUNT:
            raise ValueError(f"key code out of range: {key}")

    @staticmethod
    def _check_button(button):
        if not 0 <= button < MOUSE_BUTTON_COUNT:
            raise ValueError(f"mouse button out of range: {button}")

    def set_key_state(self, key, action):
        """Record a key event; unknown actions only mark the key as touched."""
        self._check_key(key)
        self._last_keys.append(key)
        if action == KeyAction.PRESS:
            self._pressed[key] = True
        elif action == KeyAction.REPEAT:
            self._held[key] = True
            self._pressed[key] = False
        elif action == KeyAction.RELEASE:
            self._pressed[key] = False
            self._held[key] = False

    def set_mouse_button_state(self, button, action):
        self._check_button(button)
        self._mouse_previous[button] = self._mouse_current[button]
        self._mouse_current[button] = bool(action)

    def key_down(self, key):
        self._check_key(key)
        return self._held[key] or self._pressed[key]

    def key_held(self, key):
        self._check_key(key)
        return self._held[key]

    def key_pressed(self, key):
        """True only in the frame in which the key went down."""
        self._check_key(key)
        return not self._old_pressed[key] and self._pressed[key]

    def key_released(self, key):
        self._check_key(key)
        return not self._pressed[key]

    def mouse_button_down(self, button):
        self._check_button(button)
        return self._mouse_current[button]

    def mouse_pressed(self, button):
        """True only in the frame in which the button went down."""
        self._check_button(button)
        return not self._mouse_previous[button] and self._mouse_current[button]

    def on_mouse_move(self, x, y):
        """Record a cursor move; the offset's y grows upwards."""
        if self.first_mouse:
            self.mouse_pos = (x, y)
            self.first_mouse = False
        last_x, last_y = self.mouse_pos
        self.mouse_offset = (x - last_x, last_y - y)
        self.mouse_pos = (x, y)

    def set_mouse_fixed_pos(self, x, y):
        """Place the cursor from coordinates centred on the screen."""
        self.mouse_pos = (
            (self.screen_width * x) / 2 + self.screen_width // 2,
            (self.screen_height * y) / 2 + self.screen_height // 2,
        )

    def mouse_fixed_pos(self):
        """Return the cursor in [-1, 1] screen coordinates with y pointing up."""
        x, y = self.mouse_pos
        fixed_x = (x / self.screen_width) * 2.0 - 1.0
        fixed_y = (y / self.screen_height) * 2.0 - 1.0
        return (fixed_x, -fixed_y)

    def end_frame(self):
        """Remember this frame's states and clear the mouse offset."""
        while self._last_keys:
            key = self._last_keys.pop()
            self._old_pressed[key] = self._pressed[key]
        self._mouse_previous = list(self._mouse_current)
        self.mouse_offset = (0.0, 0.0)