"""Entry point for the corridor flythrough viewer."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence, Tuple

import pygame

from flythrough.anchors import AnchorMissing
from flythrough.animation_loop import PendingFrameQueue
from flythrough.camera import CameraPose
from flythrough.config import ConfigError, FlythroughConfig
from flythrough.scene import SceneNode, create_corridor_scene
from flythrough.session import FlythroughSession
from rendering.draw_system import SceneRenderer
from ui.reload_button import ReloadButton

logger = logging.getLogger(__name__)

TARGET_FPS = 60


class PygameFrameClock(PendingFrameQueue):
    """Frame clock backed by ``pygame.time``; pending frames run once per loop pass."""

    def now(self) -> float:
        return float(pygame.time.get_ticks())


def _parse_size(value: str) -> Tuple[int, int]:
    try:
        width, height = (int(part) for part in value.lower().split("x"))
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {value!r}") from exc
    return (width, height)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Scripted camera flythrough of a corridor scene")
    parser.add_argument("--windowed", action="store_true", help="Run in a resizable window")
    parser.add_argument(
        "--size",
        type=_parse_size,
        default=(1280, 720),
        help="Window size as WIDTHxHEIGHT when --windowed (default: 1280x720)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging (DEBUG level)",
    )
    return parser.parse_args(argv)


def load_scene() -> SceneNode:
    scene = create_corridor_scene()
    logger.info(f"Scene loaded with {sum(1 for _ in scene.traverse())} nodes")
    return scene


def run(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = FlythroughConfig.from_env()
    except ConfigError as exc:
        logger.error(f"Invalid flythrough configuration: {exc}")
        return 1

    pygame.init()
    pygame.display.set_caption("Corridor Flythrough")
    if args.windowed:
        flags = pygame.OPENGL | pygame.DOUBLEBUF | pygame.RESIZABLE
        pygame.display.set_mode(args.size, flags)
    else:
        flags = pygame.OPENGL | pygame.DOUBLEBUF | pygame.FULLSCREEN
        pygame.display.set_mode((0, 0), flags)
    window_size = pygame.display.get_surface().get_size()

    scene = load_scene()
    renderer = SceneRenderer()
    reload_button = ReloadButton(window_size)
    clock = PygameFrameClock()
    session: Optional[FlythroughSession] = None

    def present(pose: CameraPose) -> None:
        renderer.draw_scene(scene, pose, anchors=session.anchors, phase=session.phase)
        reload_button.draw()
        pygame.display.flip()

    try:
        session = FlythroughSession.from_scene(
            scene, clock, config, present=present, viewport_size=window_size
        )
    except AnchorMissing as exc:
        logger.error(f"Cannot start flythrough: {exc}")
        pygame.quit()
        return 1

    session.start()

    frame_timer = pygame.time.Clock()
    dragging = False
    running = True
    while running:
        frame_timer.tick(TARGET_FPS)
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_r:
                session.restart()
            elif event.type == pygame.VIDEORESIZE:
                pygame.display.set_mode(event.size, pygame.OPENGL | pygame.DOUBLEBUF | pygame.RESIZABLE)
                renderer.configure_gl()
                session.pose.update_viewport(event.size)
                reload_button.update_layout(event.size)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if reload_button.handle_mouse_click(event.pos):
                    session.restart()
                else:
                    dragging = True
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                dragging = False
            elif event.type == pygame.MOUSEMOTION and dragging:
                session.on_drag(*event.rel)

        clock.run_pending()

    session.stop()
    pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(run())
