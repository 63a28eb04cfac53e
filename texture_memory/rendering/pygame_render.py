"""Pygame renderer for a square grid of colored cells.

When pygame is not available (e.g. headless CI) the module can still be
imported but instantiating :class:`PygameGridRenderer` raises
:class:`~texture_memory.common.errors.DisplayError`.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from ..common.errors import DisplayError
from ..common.logger import get_logger

__all__ = ["PygameGridRenderer", "is_available"]

logger = get_logger(__name__)

try:  # pragma: no cover - tolerate headless environments
    import pygame
except Exception:  # noqa: BLE001 - missing SDL libs
    pygame = None  # type: ignore

WINDOW_TITLE = "texture-memory"


def is_available() -> bool:
    """Return ``True`` if pygame imported successfully."""
    return pygame is not None


class PygameGridRenderer:
    """Draw a ``(size, size, 3)`` grid as filled rectangles.

    Parameters
    ----------
    window_size:
        Side length of the square window in pixels.
    cell_size:
        Side length of one grid cell in pixels.
    screen:
        Optional existing :class:`pygame.Surface` to draw into. When ``None``
        the renderer creates its own window.
    """

    def __init__(self, window_size: int, cell_size: float, screen: Optional["pygame.Surface"] = None) -> None:
        if pygame is None:
            raise DisplayError("pygame is not available")
        if screen is None:
            try:
                pygame.init()
                screen = pygame.display.set_mode((window_size, window_size))
                pygame.display.set_caption(WINDOW_TITLE)
            except pygame.error as exc:
                raise DisplayError(f"could not create display surface: {exc}") from exc
        self.screen = screen
        self.window_size = window_size
        self.cell_size = cell_size

    # -- drawing ---------------------------------------------------------
    def clear(self) -> None:
        self.screen.fill((0, 0, 0))

    def draw(self, grid: np.ndarray) -> None:
        """Clear, fill one rectangle per cell, then update the display."""
        self.clear()
        scale = self.cell_size
        width, height = grid.shape[:2]
        for i in range(width):
            x0 = int(round(i * scale))
            x1 = int(round((i + 1) * scale))
            for j in range(height):
                y0 = int(round(j * scale))
                y1 = int(round((j + 1) * scale))
                r, g, b = grid[i, j]
                pygame.draw.rect(self.screen, (int(r), int(g), int(b)), (x0, y0, x1 - x0, y1 - y0))
        pygame.display.flip()

    def quit_requested(self) -> bool:
        """Drain the event queue; ``True`` on window close or Escape."""
        requested = False
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                requested = True
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                requested = True
        return requested

    def close(self) -> None:
        if pygame is not None:  # pragma: no cover - runtime guard
            pygame.display.quit()
