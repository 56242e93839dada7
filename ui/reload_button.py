"""Reload button overlay that restarts the flythrough."""
from __future__ import annotations

from typing import Tuple

import pygame
from OpenGL import GL as gl

Vec2 = Tuple[int, int]


class ReloadButton:
    """Small button pinned to the top centre of the window."""

    LABEL = "Reload"
    TOP_MARGIN = 40

    def __init__(self, window_size: Tuple[int, int]) -> None:
        pygame.font.init()
        self._font = pygame.font.SysFont("Consolas", 20, bold=True)
        self._window_size = window_size
        self.rect = pygame.Rect(0, 0, 0, 0)
        self.update_layout(window_size)

    def update_layout(self, window_size: Tuple[int, int]) -> None:
        self._window_size = window_size
        width, _ = window_size
        text_width, text_height = self._font.size(self.LABEL)
        button_width = text_width + 20
        button_height = text_height + 20
        left = int((width - button_width) * 0.5)
        self.rect = pygame.Rect(left, self.TOP_MARGIN, button_width, button_height)

    def handle_mouse_click(self, pos: Vec2) -> bool:
        return self.rect.collidepoint(pos)

    def draw(self) -> None:
        width, height = self._window_size
        gl.glViewport(0, 0, width, height)
        gl.glMatrixMode(gl.GL_PROJECTION)
        gl.glLoadIdentity()
        gl.glOrtho(0, width, height, 0, -1, 1)
        gl.glMatrixMode(gl.GL_MODELVIEW)
        gl.glLoadIdentity()
        gl.glDisable(gl.GL_DEPTH_TEST)
        gl.glEnable(gl.GL_BLEND)
        gl.glBlendFunc(gl.GL_SRC_ALPHA, gl.GL_ONE_MINUS_SRC_ALPHA)

        self._draw_button()

        gl.glDisable(gl.GL_BLEND)
        gl.glEnable(gl.GL_DEPTH_TEST)

    def _draw_button(self) -> None:
        rect = self.rect
        hovered = rect.collidepoint(pygame.mouse.get_pos())
        if hovered:
            fill = (0.3, 0.3, 0.3, 0.95)
            border = (0.65, 0.8, 1.0, 1.0)
        else:
            fill = (0.2, 0.2, 0.2, 0.92)
            border = (0.45, 0.5, 0.7, 1.0)
        gl.glColor4f(*fill)
        gl.glBegin(gl.GL_QUADS)
        gl.glVertex2f(rect.left, rect.top)
        gl.glVertex2f(rect.right, rect.top)
        gl.glVertex2f(rect.right, rect.bottom)
        gl.glVertex2f(rect.left, rect.bottom)
        gl.glEnd()
        gl.glColor4f(*border)
        gl.glBegin(gl.GL_LINE_LOOP)
        gl.glVertex2f(rect.left + 1, rect.top + 1)
        gl.glVertex2f(rect.right - 1, rect.top + 1)
        gl.glVertex2f(rect.right - 1, rect.bottom - 1)
        gl.glVertex2f(rect.left + 1, rect.bottom - 1)
        gl.glEnd()
        self._draw_text_centered(rect.centerx, rect.centery, self.LABEL)

    def _draw_text_centered(self, center_x: float, center_y: float, text: str) -> None:
        surface = self._font.render(text, True, (255, 255, 255))
        data = pygame.image.tobytes(surface, "RGBA", True)
        x = center_x - surface.get_width() * 0.5
        y = center_y + surface.get_height() * 0.5
        gl.glRasterPos2f(x, y)
        gl.glDrawPixels(
            surface.get_width(),
            surface.get_height(),
            gl.GL_RGBA,
            gl.GL_UNSIGNED_BYTE,
            data,
        )
