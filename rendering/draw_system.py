"""Wireframe renderer for the corridor scene."""
from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from OpenGL import GL as gl

import numpy as np
import pygame

from flythrough.anchors import AnchorSet
from flythrough.camera import CameraPose
from flythrough.phases import Phase
from flythrough.scene import AxesShape, BoxShape, GridShape, SceneNode
from .wireframe_primitives import (
    WireframeMesh,
    create_axes_mesh,
    create_box_mesh,
    create_grid_mesh,
    create_marker_mesh,
)

Vec3 = Tuple[float, float, float]
Color = Tuple[float, float, float, float]

BACKGROUND_COLOR: Color = (0x11 / 255.0, 0x11 / 255.0, 0x11 / 255.0, 1.0)
LINE_COLOR: Color = (0x66 / 255.0, 0x99 / 255.0, 0xCC / 255.0, 1.0)
LINE_WIDTH = 1.5

PHASE_LABELS: Dict[Phase, str] = {
    Phase.HOLD: "Hold",
    Phase.APPROACH_MIDDLE: "Approaching middle",
    Phase.AIM_END: "Aiming at end",
    Phase.APPROACH_END: "Approaching end",
    Phase.FREE_LOOK: "Free look (drag to look around)",
}


class SceneRenderer:
    """Draws scene nodes as wireframes from the current camera pose."""

    def __init__(self) -> None:
        pygame.font.init()
        self.marker_mesh = create_marker_mesh()
        self.grid_color: Color = (0.35, 0.35, 0.38, 1.0)
        self.anchor_color: Color = (1.0, 0.82, 0.26, 1.0)
        self._overlay_font = pygame.font.SysFont("Consolas", 16)
        self._mesh_cache: Dict[int, WireframeMesh] = {}
        self.configure_gl()

    def configure_gl(self) -> None:
        """(Re)apply the fixed GL state; needed again after the display is reset."""
        gl.glClearColor(*BACKGROUND_COLOR)
        gl.glEnable(gl.GL_DEPTH_TEST)
        gl.glDepthFunc(gl.GL_LEQUAL)
        gl.glEnable(gl.GL_BLEND)
        gl.glBlendFunc(gl.GL_SRC_ALPHA, gl.GL_ONE_MINUS_SRC_ALPHA)
        gl.glEnable(gl.GL_LINE_SMOOTH)
        gl.glLineWidth(LINE_WIDTH)

    def draw_scene(
        self,
        scene: SceneNode,
        pose: CameraPose,
        *,
        anchors: Optional[AnchorSet] = None,
        phase: Optional[Phase] = None,
    ) -> None:
        gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)
        width, height = pose.viewport_size
        gl.glViewport(0, 0, width, height)
        self._apply_camera(pose)

        for node in scene.traverse():
            mesh = self._mesh_for(node)
            if mesh is None:
                continue
            color = self.grid_color if isinstance(node.shape, GridShape) else LINE_COLOR
            self._draw_mesh(mesh, node.position, color=color)

        if anchors is not None:
            for anchor in (anchors.start, anchors.middle, anchors.end):
                self._draw_mesh(self.marker_mesh, anchor.position, color=self.anchor_color)

        if self._begin_overlay(pose):
            if anchors is not None:
                self._draw_anchor_labels(anchors, pose)
            if phase is not None:
                self._draw_overlay_text(12.0, height - 28.0, PHASE_LABELS[phase], (220, 225, 240))
            self._end_overlay()

    def _mesh_for(self, node: SceneNode) -> Optional[WireframeMesh]:
        shape = node.shape
        if shape is None:
            return None
        key = id(shape)
        mesh = self._mesh_cache.get(key)
        if mesh is not None:
            return mesh
        if isinstance(shape, BoxShape):
            mesh = create_box_mesh(shape.size)
        elif isinstance(shape, GridShape):
            mesh = create_grid_mesh(shape.size, shape.divisions)
        elif isinstance(shape, AxesShape):
            mesh = create_axes_mesh(shape.length)
        else:
            return None
        self._mesh_cache[key] = mesh
        return mesh

    def _draw_mesh(
        self,
        mesh: WireframeMesh,
        position: Vec3,
        *,
        color: Color = LINE_COLOR,
    ) -> None:
        transformed = mesh.transformed(offset=position).vertices

        def _emit(segments: Sequence[Tuple[int, int]], seg_color: Color) -> None:
            if not segments:
                return
            gl.glColor4f(*seg_color)
            gl.glBegin(gl.GL_LINES)
            for start_index, end_index in segments:
                gl.glVertex3f(*transformed[start_index])
                gl.glVertex3f(*transformed[end_index])
            gl.glEnd()

        _emit(mesh.segments, color)

        if mesh.colored_segments:
            grouped: Dict[Color, List[Tuple[int, int]]] = {}
            for segment in mesh.colored_segments:
                grouped.setdefault(segment.color, []).append((segment.start, segment.end))
            for segment_color, pairs in grouped.items():
                _emit(pairs, segment_color)

    def _apply_camera(self, pose: CameraPose) -> None:
        projection = pose.projection_matrix()
        view = pose.view_matrix()
        gl.glMatrixMode(gl.GL_PROJECTION)
        gl.glLoadMatrixf(np.transpose(projection).flatten())
        gl.glMatrixMode(gl.GL_MODELVIEW)
        gl.glLoadMatrixf(np.transpose(view).flatten())

    def _draw_anchor_labels(self, anchors: AnchorSet, pose: CameraPose) -> None:
        labelled: Iterable[Tuple[str, Vec3]] = (
            ("start", anchors.start.position),
            ("middle", anchors.middle.position),
            ("end", anchors.end.position),
        )
        for label, position in labelled:
            screen = pose.world_to_screen(position)
            if screen is None:
                continue
            self._draw_overlay_text(screen[0] + 8.0, screen[1] - 8.0, label, (255, 210, 66))

    def _begin_overlay(self, pose: CameraPose) -> bool:
        width, height = pose.viewport_size
        if width <= 0 or height <= 0:
            return False
        gl.glMatrixMode(gl.GL_PROJECTION)
        gl.glPushMatrix()
        gl.glLoadIdentity()
        gl.glOrtho(0, width, height, 0, -1, 1)
        gl.glMatrixMode(gl.GL_MODELVIEW)
        gl.glPushMatrix()
        gl.glLoadIdentity()
        gl.glDisable(gl.GL_DEPTH_TEST)
        return True

    def _end_overlay(self) -> None:
        gl.glEnable(gl.GL_DEPTH_TEST)
        gl.glPopMatrix()
        gl.glMatrixMode(gl.GL_PROJECTION)
        gl.glPopMatrix()
        gl.glMatrixMode(gl.GL_MODELVIEW)

    def _draw_overlay_text(self, x: float, y: float, text: str, color: Tuple[int, int, int]) -> None:
        surface = self._overlay_font.render(text, True, color)
        data = pygame.image.tobytes(surface, "RGBA", True)
        gl.glRasterPos2f(x, y + surface.get_height())
        gl.glDrawPixels(
            surface.get_width(),
            surface.get_height(),
            gl.GL_RGBA,
            gl.GL_UNSIGNED_BYTE,
            data,
        )
