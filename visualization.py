# visualization.py
"""
Handles the visualization of the Lorenz ensemble using Pygame.

The renderer only reads each particle's position and visible trail; it
never touches integration state. Camera orbit, pause, trail and count
controls are forwarded to the Simulation object.
"""
import logging
import math
import pygame
import numpy as np
from typing import List, Optional, Sequence, Tuple

from constants import (
    BACKGROUND_COLOR, CAMERA_DRAG_SENSITIVITY, CAMERA_FOCUS, CAMERA_ZOOM_STEP,
    DEFAULT_CAMERA_SCALE, FPS, FULLSCREEN, PARTICLE_COLOR, PARTICLE_COUNT_STEP,
    PARTICLE_RADIUS, TRAIL_FADE, TRAIL_LIGHTNESS, TRAIL_SATURATION,
    UI_PANEL_WIDTH, WINDOW_SIZE
)

# Forward reference for type hinting to avoid circular import
from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from simulation import Simulation


# --- Data Contracts ---
#
# project_points(points, yaw, pitch, scale, center, focus) -> np.ndarray:
#   - Inputs:
#     - points: (N, 3) array of attractor coordinates.
#     - yaw, pitch: camera angles in radians.
#     - scale: pixels per attractor unit.
#     - center: (x, y) screen position of the focus point.
#     - focus: (x, y, z) attractor point the camera orbits.
#   - Outputs: (N, 2) array of screen coordinates. The attractor's z axis
#     points up the screen at zero pitch.
#
# class Visualizer:
#   - __init__(self, vis_params: Optional[dict] = None):
#     - Side Effects: Initializes Pygame and creates a display surface.
#
#   - draw(self, simulation: "Simulation") -> bool:
#     - Outputs:
#       - bool: False if the user has quit, True otherwise.
#     - Side Effects: Renders particles, trails and UI to the screen,
#       handles Pygame events, and can pause, reset or resize the
#       simulation based on user input.

def project_points(
    points: np.ndarray,
    yaw: float,
    pitch: float,
    scale: float,
    center: Tuple[float, float],
    focus: Sequence[float] = CAMERA_FOCUS,
) -> np.ndarray:
    """
    Orthographic projection of attractor coordinates onto the screen.
    """
    points = np.asarray(points, dtype=np.float64).reshape(-1, 3) - np.asarray(focus)
    cos_yaw, sin_yaw = math.cos(yaw), math.sin(yaw)
    cos_pitch, sin_pitch = math.cos(pitch), math.sin(pitch)

    # Yaw spins around the attractor's z axis.
    x = points[:, 0] * cos_yaw - points[:, 1] * sin_yaw
    depth = points[:, 0] * sin_yaw + points[:, 1] * cos_yaw
    # Pitch tilts the z axis towards the viewer.
    up = points[:, 2] * cos_pitch - depth * sin_pitch

    screen = np.empty((points.shape[0], 2), dtype=np.float64)
    screen[:, 0] = center[0] + x * scale
    # Screen y grows downwards.
    screen[:, 1] = center[1] - up * scale
    return screen


def trail_colors(count: int) -> List[pygame.Color]:
    """One hue per particle, spread by the golden angle so neighbours differ."""
    colors = []
    for i in range(count):
        color = pygame.Color(0)
        color.hsla = ((i * 137.508) % 360, TRAIL_SATURATION, TRAIL_LIGHTNESS, 100)
        colors.append(color)
    return colors


class Visualizer:
    """
    Renders the ensemble and provides keyboard and mouse controls.
    """
    def __init__(self, vis_params: Optional[dict] = None):
        """
        Initializes Pygame and the display window.
        """
        pygame.init()
        pygame.font.init()
        vis_params = vis_params if vis_params is not None else {}

        if vis_params.get('fullscreen', FULLSCREEN):
            display_info = pygame.display.Info()
            width, height = display_info.current_w, display_info.current_h
            self.screen = pygame.display.set_mode((width, height), pygame.FULLSCREEN)
        else:
            width, height = vis_params.get('window_size', WINDOW_SIZE)
            self.screen = pygame.display.set_mode((width, height))

        # The view area is the total width minus the UI panel
        self.view_width = width - UI_PANEL_WIDTH
        self.view_height = height
        self.view_surface = pygame.Surface((self.view_width, self.view_height))

        self.ui_panel_surface = pygame.Surface((UI_PANEL_WIDTH, height), pygame.SRCALPHA)
        self.ui_panel_surface.fill((40, 40, 40, 160))

        pygame.display.set_caption("Lorenz Attractor")
        self.clock = pygame.time.Clock()
        self.fps = vis_params.get('fps', FPS)

        # --- Camera ---
        self.yaw = vis_params.get('camera_yaw', 0.0)
        self.pitch = vis_params.get('camera_pitch', 0.0)
        self.scale = vis_params.get('camera_scale', DEFAULT_CAMERA_SCALE)
        self.dragging = False

        self.colors: List[pygame.Color] = []

        try:
            self.font_main = pygame.font.SysFont("Segoe UI", 14)
            self.font_main_bold = pygame.font.SysFont("Segoe UI", 14, bold=True)
        except pygame.error:
            logging.warning("Segoe UI font not found, falling back to default sans-serif.")
            self.font_main = pygame.font.SysFont(None, 18)
            self.font_main_bold = pygame.font.SysFont(None, 18, bold=True)

        self.text_color_key = (200, 200, 200)
        self.text_color_value = (255, 255, 255)

        logging.info(f"Visualizer initialized with Pygame display ({width}x{height}).")

    def _ensure_colors(self, count: int) -> None:
        # Colors are keyed by particle index, so a resize keeps existing hues.
        if len(self.colors) < count:
            self.colors = trail_colors(count)

    def _handle_events(self, simulation: "Simulation") -> bool:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down visualizer.")
                return False

            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    logging.info("ESC key pressed. Shutting down visualizer.")
                    return False
                elif event.key == pygame.K_SPACE:
                    simulation.toggle_pause()
                elif event.key == pygame.K_t:
                    simulation.set_trails_enabled(not simulation.trails_enabled)
                elif event.key == pygame.K_r:
                    simulation.reset()
                elif event.key == pygame.K_UP:
                    simulation.resize(len(simulation.ensemble) + PARTICLE_COUNT_STEP)
                elif event.key == pygame.K_DOWN:
                    simulation.resize(max(0, len(simulation.ensemble) - PARTICLE_COUNT_STEP))

            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if event.pos[0] < self.view_width:
                    self.dragging = True
            if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self.dragging = False
            if event.type == pygame.MOUSEMOTION and self.dragging:
                dx, dy = event.rel
                self.yaw += dx * CAMERA_DRAG_SENSITIVITY
                self.pitch = float(np.clip(
                    self.pitch + dy * CAMERA_DRAG_SENSITIVITY, -math.pi / 2, math.pi / 2
                ))
            if event.type == pygame.MOUSEWHEEL:
                self.scale *= CAMERA_ZOOM_STEP ** event.y
        return True

    def _draw_trail(self, screen_points: np.ndarray, color: pygame.Color) -> None:
        """Draws a newest-first polyline, fading older segments into the background."""
        segments = len(screen_points) - 1
        if segments < 1:
            return
        background = pygame.Color(*BACKGROUND_COLOR)
        for i in range(segments):
            fade = TRAIL_FADE * i / segments
            pygame.draw.aaline(
                self.view_surface,
                color.lerp(background, fade),
                screen_points[i],
                screen_points[i + 1],
            )

    def _draw_status_panel(self, simulation: "Simulation") -> None:
        params = simulation.params
        rows = [
            ("FPS", f"{self.clock.get_fps():.0f}"),
            ("Particles", str(len(simulation.ensemble))),
            ("Step", str(simulation.step_count)),
            ("State", "Paused" if simulation.paused else "Running"),
            ("Trails", "On" if simulation.trails_enabled else "Off"),
            ("Sigma", f"{params.sigma:.2f}"),
            ("Rho", f"{params.rho:.2f}"),
            ("Beta", f"{params.beta:.3f}"),
            ("dt", f"{simulation.dt:g}"),
            ("", ""),
            ("Space", "pause"),
            ("T", "trails"),
            ("R", "reset"),
            ("Up/Down", f"+/-{PARTICLE_COUNT_STEP} particles"),
            ("Drag/Wheel", "orbit/zoom"),
        ]
        x_key = self.view_width + 20
        x_value = self.view_width + 120
        y = 20
        line_height = self.font_main.get_linesize() + 4
        for key, value in rows:
            if key:
                self.screen.blit(self.font_main_bold.render(key, True, self.text_color_key), (x_key, y))
                self.screen.blit(self.font_main.render(value, True, self.text_color_value), (x_value, y))
            y += line_height

    def draw(self, simulation: "Simulation") -> bool:
        """
        Draws all particles and UI, and handles events.

        Returns:
            bool: False if the simulation should exit, True otherwise.
        """
        if not self._handle_events(simulation):
            return False

        ensemble = simulation.ensemble
        self._ensure_colors(len(ensemble))
        center = (self.view_width / 2, self.view_height / 2)
        self.view_surface.fill(BACKGROUND_COLOR)

        if simulation.trails_enabled:
            for i, trail in enumerate(ensemble.trails()):
                if len(trail) < 2 or not np.isfinite(trail).all():
                    continue
                screen_points = project_points(trail, self.yaw, self.pitch, self.scale, center)
                self._draw_trail(screen_points, self.colors[i])

        positions = ensemble.positions()
        if len(positions):
            finite = np.isfinite(positions).all(axis=1)
            screen_points = project_points(positions[finite], self.yaw, self.pitch, self.scale, center)
            for x, y in screen_points:
                pygame.draw.circle(self.view_surface, PARTICLE_COLOR, (int(x), int(y)), PARTICLE_RADIUS)

        self.screen.blit(self.view_surface, (0, 0))
        self.screen.blit(self.ui_panel_surface, (self.view_width, 0))
        self._draw_status_panel(simulation)

        pygame.display.flip()
        self.clock.tick(self.fps)
        return True

    def close(self):
        """Shuts down Pygame."""
        pygame.font.quit()
        pygame.quit()
