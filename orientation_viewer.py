from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

import numpy as np
import pygame

from acc_orientation.frame import OrientationFrame
from acc_orientation.orientation import (
    Orientation,
    OrientationMagnitude,
    default_orientation,
    find_vector_components,
    find_vector_magnitudes,
)
from acc_orientation.vector_math import magnitude, rotate_about_axis, unit_vector

logger = logging.getLogger(__name__)

WIDTH, HEIGHT = 1100, 720
BACKGROUND_TOP = np.array([12, 18, 45])
BACKGROUND_BOTTOM = np.array([3, 5, 15])
GRID_COLOR = (40, 90, 130)
UP_COLOR = (120, 140, 255)
FRONT_COLOR = (120, 255, 160)
RIGHT_COLOR = (255, 110, 110)
UP_FRONT_COLOR = (150, 150, 150)
MEASURED_COLOR = (255, 220, 140)
GUIDE_COLOR = (110, 110, 120)

GRID_SIZE = 600
GRID_STEP = 60
FPS_TARGET = 60
DISPLAY_LENGTH = 320.0
ROTATION_SPEED = 45.0  # degrees per second
UNIT_Z = np.array([0.0, 0.0, 1.0], dtype=np.float64)

# Sample readings: device at rest, then accelerating forward.
SAMPLE_UP = np.array([-16.0, -15.0, -975.0])
SAMPLE_UP_FRONT = np.array([-185.0, 300.0, -910.0])
SAMPLE_MEASURED = np.array([-500.0, 600.0, 400.0])


def _build_grid_lines() -> list[tuple[np.ndarray, np.ndarray]]:
    lines: list[tuple[np.ndarray, np.ndarray]] = []
    for offset in range(-GRID_SIZE, GRID_SIZE + 1, GRID_STEP):
        lines.append(
            (
                np.array([offset, -GRID_SIZE, 0.0], dtype=np.float64),
                np.array([offset, GRID_SIZE, 0.0], dtype=np.float64),
            )
        )
        lines.append(
            (
                np.array([-GRID_SIZE, offset, 0.0], dtype=np.float64),
                np.array([GRID_SIZE, offset, 0.0], dtype=np.float64),
            )
        )
    return lines


GRID_LINES = _build_grid_lines()


AXIS_LINES = [
    (
        np.array([-GRID_SIZE, 0.0, 0.0], dtype=np.float64),
        np.array([GRID_SIZE, 0.0, 0.0], dtype=np.float64),
        (150, 70, 70),
    ),
    (
        np.array([0.0, -GRID_SIZE, 0.0], dtype=np.float64),
        np.array([0.0, GRID_SIZE, 0.0], dtype=np.float64),
        (70, 150, 80),
    ),
    (
        np.array([0.0, 0.0, -GRID_SIZE], dtype=np.float64),
        np.array([0.0, 0.0, GRID_SIZE], dtype=np.float64),
        (80, 90, 160),
    ),
]


def clamp(value: float, min_value: float, max_value: float) -> float:
    return max(min_value, min(max_value, value))


@dataclass
class Camera:
    fov: float = 760.0
    radius: float = 1100.0
    yaw: float = math.radians(35.0)
    pitch: float = math.radians(25.0)
    focus: np.ndarray = field(default_factory=lambda: np.zeros(3))
    _position: np.ndarray = field(init=False, default_factory=lambda: np.zeros(3))
    _right: np.ndarray = field(init=False, default_factory=lambda: np.array([1.0, 0.0, 0.0]))
    _up: np.ndarray = field(init=False, default_factory=lambda: np.array([0.0, 0.0, 1.0]))
    _forward: np.ndarray = field(init=False, default_factory=lambda: np.array([0.0, 0.0, -1.0]))
    _basis_ready: bool = field(init=False, default=False)

    def position(self) -> np.ndarray:
        x = self.focus[0] + self.radius * math.cos(self.pitch) * math.cos(self.yaw)
        y = self.focus[1] + self.radius * math.cos(self.pitch) * math.sin(self.yaw)
        z = self.focus[2] + self.radius * math.sin(self.pitch)
        return np.array([x, y, z], dtype=np.float64)

    def _basis(self) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        if self._basis_ready:
            return self._position, self._right, self._up, self._forward

        position = self.position()
        forward = unit_vector(self.focus - position)
        world_up = UNIT_Z
        right = np.cross(forward, world_up)
        if np.linalg.norm(right) < 1e-6:
            world_up = np.array([0.0, 1.0, 0.0], dtype=np.float64)
            right = np.cross(forward, world_up)
        right = unit_vector(right)
        up = unit_vector(np.cross(right, forward))

        self._position = position
        self._right = right
        self._up = up
        self._forward = forward
        self._basis_ready = True
        return position, right, up, forward

    def world_to_camera(self, point: np.ndarray) -> np.ndarray:
        position, right, up, forward = self._basis()
        relative = point - position
        return np.array([
            np.dot(relative, right),
            np.dot(relative, up),
            np.dot(relative, forward),
        ])

    def project(self, point: np.ndarray) -> tuple[int, int, float] | None:
        cam_point = self.world_to_camera(point)
        depth = cam_point[2]
        if depth <= 2.0:
            return None
        scale = self.fov / depth
        x = WIDTH / 2 + cam_point[0] * scale
        y = HEIGHT / 2 - cam_point[1] * scale
        return int(x), int(y), depth

    def handle_input(self, dt: float) -> None:
        keys = pygame.key.get_pressed()
        orbit_speed = 1.8
        pitch_speed = 1.2
        zoom_speed = 420.0
        changed = False

        if keys[pygame.K_a]:
            self.yaw -= orbit_speed * dt
            changed = True
        if keys[pygame.K_d]:
            self.yaw += orbit_speed * dt
            changed = True
        if keys[pygame.K_w]:
            self.pitch = clamp(self.pitch + pitch_speed * dt, math.radians(-85), math.radians(85))
            changed = True
        if keys[pygame.K_s]:
            self.pitch = clamp(self.pitch - pitch_speed * dt, math.radians(-85), math.radians(85))
            changed = True
        if keys[pygame.K_q]:
            self.radius = clamp(self.radius - zoom_speed * dt, 400.0, 2000.0)
            changed = True
        if keys[pygame.K_e]:
            self.radius = clamp(self.radius + zoom_speed * dt, 400.0, 2000.0)
            changed = True

        if changed:
            self._basis_ready = False

    def reset_view(self) -> None:
        self.yaw = math.radians(35.0)
        self.pitch = math.radians(25.0)
        self.radius = 1100.0
        self._basis_ready = False


@dataclass
class ViewState:
    frame: OrientationFrame
    measured: np.ndarray
    up_front: np.ndarray
    force_default: bool = False
    unit_scale: bool = True

    @property
    def orientation(self) -> Orientation:
        if self.force_default:
            return default_orientation()
        return self.frame.orientation

    @property
    def reference_length(self) -> float:
        """Length of the measured up reading; raw readings are scaled by it."""
        return magnitude(self.frame.orientation.v_up)

    def rotate_measured(self, direction: float, dt: float) -> None:
        if abs(direction) < 1e-6:
            return
        self.measured = rotate_about_axis(
            self.measured, self.orientation.v_up, direction * ROTATION_SPEED * dt
        )


def scene_vector(vec: np.ndarray, reference_length: float, unit_scale: bool) -> np.ndarray:
    """Scale a reading to scene units, either as a unit vector or relative to v_up."""
    length = magnitude(vec)
    if length == 0:
        return np.zeros(3)
    if unit_scale:
        return vec / length * DISPLAY_LENGTH
    return vec / reference_length * DISPLAY_LENGTH


def build_background() -> pygame.Surface:
    strip = pygame.Surface((1, HEIGHT))
    for y in range(HEIGHT):
        t = y / max(HEIGHT - 1, 1)
        color = BACKGROUND_TOP * (1 - t) + BACKGROUND_BOTTOM * t
        strip.set_at((0, y), tuple(color.astype(int)))
    return pygame.transform.smoothscale(strip, (WIDTH, HEIGHT))


def draw_line3d(
    surface: pygame.Surface,
    start: np.ndarray,
    end: np.ndarray,
    color: tuple[int, int, int],
    camera: Camera,
    width: int = 1,
    fade: bool = True,
) -> None:
    start_proj = camera.project(start)
    end_proj = camera.project(end)
    if not start_proj or not end_proj:
        return
    sx, sy, sd = start_proj
    ex, ey, ed = end_proj
    shade = 1.0
    if fade:
        depth = (sd + ed) / 2.0
        shade = clamp(1.6 - depth * 0.0009, 0.25, 1.0)
    tinted = tuple(int(c * shade) for c in color)
    pygame.draw.line(surface, tinted, (sx, sy), (ex, ey), width)


def draw_axes(surface: pygame.Surface, camera: Camera) -> None:
    for start, end, color in AXIS_LINES:
        draw_line3d(surface, start, end, color, camera, 2)


def draw_floor_grid(surface: pygame.Surface, camera: Camera) -> None:
    for start, end in GRID_LINES:
        draw_line3d(surface, start, end, GRID_COLOR, camera)


def draw_orientation(surface: pygame.Surface, state: ViewState, camera: Camera) -> None:
    origin = np.zeros(3)
    orientation = state.orientation
    axis_length = magnitude(orientation.v_up)
    for axis, color in zip(orientation, (UP_COLOR, FRONT_COLOR, RIGHT_COLOR)):
        end = scene_vector(axis, axis_length, state.unit_scale)
        draw_line3d(surface, origin, end, color, camera, 4, fade=False)
    if not state.force_default:
        end = scene_vector(state.up_front, state.reference_length, state.unit_scale)
        draw_line3d(surface, origin, end, UP_FRONT_COLOR, camera, 1, fade=False)


def measured_segments(state: ViewState) -> list[tuple[np.ndarray, np.ndarray, tuple[int, int, int], int]]:
    """Measured vector, its projection on each axis and the guides joining them."""
    origin = np.zeros(3)
    reference = state.reference_length
    measured_end = scene_vector(state.measured, reference, state.unit_scale)
    segments = [(origin, measured_end, MEASURED_COLOR, 3)]
    components = find_vector_components(state.measured, state.orientation)
    for component, color in zip(components, (UP_COLOR, FRONT_COLOR, RIGHT_COLOR)):
        end = scene_vector(component, reference, state.unit_scale)
        segments.append((origin, end, color, 2))
        segments.append((measured_end, end, GUIDE_COLOR, 1))
    return segments


def draw_measured(surface: pygame.Surface, state: ViewState, camera: Camera) -> None:
    for start, end, color, width in measured_segments(state):
        draw_line3d(surface, start, end, color, camera, width, fade=color == GUIDE_COLOR)


def describe_magnitudes(magnitudes: OrientationMagnitude) -> list[str]:
    labels = (("UP", "DOWN"), ("FRONT", "BACK"), ("RIGHT", "LEFT"))
    lines = []
    for value, (positive, negative) in zip(magnitudes.as_tuple(), labels):
        name = positive if value >= 0 else negative
        lines.append(f"{name:<6} {abs(value):9.1f}")
    return lines


def draw_hud(
    surface: pygame.Surface,
    state: ViewState,
    camera: Camera,
    font: pygame.font.Font,
    fps: float | None = None,
) -> None:
    magnitudes = find_vector_magnitudes(state.measured, state.orientation)
    hud_lines = [
        "Measured vector in device orientation",
        "← / → rotate measured vector around up",
        "A/D yaw | W/S pitch | Q/E zoom | C reset",
        f"O default orientation: {'ON' if state.force_default else 'OFF'}"
        f" | N unit vectors: {'ON' if state.unit_scale else 'OFF'}",
        f"|v|: {magnitude(state.measured):.1f} | |up|: {magnitude(state.orientation.v_up):.1f}",
        *describe_magnitudes(magnitudes),
        f"Cam r={camera.radius:.0f} pitch={math.degrees(camera.pitch):.1f}°",
    ]
    if fps is not None:
        hud_lines.append(f"FPS: {fps:.0f}/{FPS_TARGET}")
    for idx, text in enumerate(hud_lines):
        surface.blit(font.render(text, True, (230, 235, 245)), (16, 16 + idx * 20))


def handle_keydown(event: pygame.event.Event, state: ViewState, camera: Camera) -> bool:
    if event.key == pygame.K_ESCAPE:
        return False
    if event.key == pygame.K_c:
        camera.reset_view()
    if event.key == pygame.K_o:
        state.force_default = not state.force_default
        logger.info("Default orientation %s", "on" if state.force_default else "off")
    if event.key == pygame.K_n:
        state.unit_scale = not state.unit_scale
        logger.info("Unit vector scaling %s", "on" if state.unit_scale else "off")
    return True


def handle_events(state: ViewState, camera: Camera) -> bool:
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            if not handle_keydown(event, state, camera):
                return False
    return True


def rotation_input_from_keys() -> float:
    keys = pygame.key.get_pressed()
    direction = 0.0
    if keys[pygame.K_LEFT]:
        direction += 1.0
    if keys[pygame.K_RIGHT]:
        direction -= 1.0
    return direction


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    pygame.init()
    pygame.font.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption("Device Orientation")
    font = pygame.font.SysFont("JetBrains Mono", 18)
    clock = pygame.time.Clock()

    background = build_background()

    frame = OrientationFrame(SAMPLE_UP, SAMPLE_UP_FRONT)
    state = ViewState(frame=frame, measured=SAMPLE_MEASURED.copy(), up_front=SAMPLE_UP_FRONT.copy())
    logger.info("Start magnitudes: %s", frame.magnitudes(state.measured))
    camera = Camera()

    running = True
    while running:
        dt = clock.tick(FPS_TARGET) / 1000.0

        running = handle_events(state, camera)
        if not running:
            break

        camera.handle_input(dt)
        state.rotate_measured(rotation_input_from_keys(), dt)
        fps_display = clock.get_fps()

        screen.blit(background, (0, 0))
        draw_floor_grid(screen, camera)
        draw_axes(screen, camera)
        draw_orientation(screen, state, camera)
        draw_measured(screen, state, camera)
        draw_hud(screen, state, camera, font, fps_display)

        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":
    main()
