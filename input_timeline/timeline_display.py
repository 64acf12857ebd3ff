import time
from typing import Dict, Any, Optional, Tuple

import pygame

from .history_registry import HistoryRegistry
from .timeline_builder import TimelineBuilder

# pygame joystick button index for each gamepad button id (XInput layout)
GAMEPAD_BUTTON_INDEX: Dict[str, int] = {
    "A": 0, "B": 1, "X": 2, "Y": 3,
    "L": 4, "R": 5, "SELECT": 6, "START": 7,
}
# Hat axis and direction for each d-pad button id
GAMEPAD_HAT_DIRECTION: Dict[str, Tuple[int, int]] = {
    "LEFT": (0, -1), "RIGHT": (0, 1), "DOWN": (1, -1), "UP": (1, 1),
}

LABEL_X = 10
BOX_X = 28
LINE_X = 41
FIRST_ROW_Y = 52
# Open transitions end slightly in the past so the newest pixel is settled.
OPEN_SEGMENT_LAG = 0.002


class GamepadReader:
    """Reads the tracked buttons of the first connected pygame joystick."""

    def __init__(self):
        self._joystick: Optional["pygame.joystick.JoystickType"] = None

    def connect(self) -> bool:
        pygame.joystick.init()
        if pygame.joystick.get_count() == 0:
            if self._joystick is not None:
                print("[Gamepad] Joystick disconnected")
            self._joystick = None
            return False
        if self._joystick is None:
            self._joystick = pygame.joystick.Joystick(0)
            self._joystick.init()
            print(f"[Gamepad] Using joystick: {self._joystick.get_name()}")
        return True

    def read(self, button_ids) -> Dict[str, bool]:
        """Pressed state of every known button id; unmapped ids are skipped."""
        if self._joystick is None:
            return {}
        states: Dict[str, bool] = {}
        hat = self._joystick.get_hat(0) if self._joystick.get_numhats() > 0 else (0, 0)
        for button_id in button_ids:
            if button_id in GAMEPAD_BUTTON_INDEX:
                index = GAMEPAD_BUTTON_INDEX[button_id]
                if index < self._joystick.get_numbuttons():
                    states[button_id] = bool(self._joystick.get_button(index))
            elif button_id in GAMEPAD_HAT_DIRECTION:
                axis, direction = GAMEPAD_HAT_DIRECTION[button_id]
                states[button_id] = hat[axis] == direction
        return states


class TimelineDisplay:
    def __init__(self, registry: HistoryRegistry, settings: Dict[str, Any],
                 reader: Optional[GamepadReader] = None):
        self._registry = registry
        self._display_seconds = float(settings['display_seconds'])
        self._line_length = int(settings['line_length'])
        self._row_height = int(settings['row_height'])
        self._frequency_threshold = int(settings['frequency_threshold'])
        self._elapsed_threshold = float(settings['elapsed_threshold'])
        self._poll_interval = float(settings['poll_interval'])
        self._builder = TimelineBuilder(float(settings['pixels_per_ms']), self._line_length)
        self._reader = reader or GamepadReader()
        self._is_running_loop = False

        pygame.init()
        width = LINE_X + self._line_length + 80
        height = FIRST_ROW_Y + self._row_height * max(len(registry), 1) + 20
        self.screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Input Timeline")
        self._font = pygame.font.Font(None, 18)

        self._colors: Dict[str, pygame.Color] = {}

    def stop_display(self):
        self._is_running_loop = False

    def _row_color(self, name: str) -> pygame.Color:
        if name not in self._colors:
            try:
                self._colors[name] = pygame.Color(name)
            except ValueError:
                print(f"[Display] Unknown color '{name}', using white")
                self._colors[name] = pygame.Color("white")
        return self._colors[name]

    def poll_inputs(self, now: float) -> None:
        states = self._reader.read(self._registry.button_ids())
        for button_id, pressed in states.items():
            self._registry.update(button_id, pressed, now)

    def draw(self, now: float) -> None:
        self.screen.fill((0, 0, 0))
        window_end = now - OPEN_SEGMENT_LAG
        window_start = now - self._display_seconds
        info_x = LINE_X + self._line_length + 5
        y_pos = FIRST_ROW_Y

        for button_id, history in self._registry.items():
            color = self._row_color(history.color)
            stats = self._registry.stats_for(button_id)
            dim = 1.0 if history.has_history() else 0.3

            label = self._font.render(history.label, True, (255, 255, 255))
            self.screen.blit(label, (LABEL_X, y_pos - 17))

            # State box and baseline
            faded = pygame.Color(int(color.r * dim), int(color.g * dim), int(color.b * dim))
            pygame.draw.rect(self.screen, faded, pygame.Rect(BOX_X, y_pos - 9, 13, 13), 1)
            pygame.draw.rect(self.screen, faded, pygame.Rect(LINE_X, y_pos - 3, self._line_length - 1, 1))

            for segment in self._builder.build_for(history, window_start, window_end):
                rect = pygame.Rect(LINE_X + segment.offset_px, y_pos - 7, segment.width_px, 5)
                pygame.draw.rect(self.screen, color, rect)

            if stats.is_pressed:
                pygame.draw.rect(self.screen, color, pygame.Rect(BOX_X, y_pos - 9, 12, 12))
                if stats.pressed_elapsed > self._elapsed_threshold:
                    text = self._font.render(f"{stats.pressed_elapsed:04.1f}", True, color)
                    self.screen.blit(text, (info_x, y_pos - 17))

            if stats.pressed_count_last_second >= self._frequency_threshold:
                text = self._font.render(f"x{stats.pressed_count_last_second}", True, color)
                self.screen.blit(text, (info_x, y_pos - 17))

            y_pos += self._row_height

        pygame.display.flip()

    def run(self):
        self._is_running_loop = True
        clock = pygame.time.Clock()
        last_tick = time.monotonic()

        print("[Display] Starting Pygame event loop...")
        while self._is_running_loop:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._is_running_loop = False
                if event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE or event.key == pygame.K_q:
                        self._is_running_loop = False

            if not self._is_running_loop:
                break

            now = time.monotonic()
            if self._reader.connect():
                self.poll_inputs(now)
            self._registry.tick(now, now - last_tick)
            last_tick = now
            self.draw(now)

            clock.tick(max(1, int(1.0 / self._poll_interval)))

        pygame.quit()
        print("[Display] Pygame quit.")
