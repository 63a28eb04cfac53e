"""Image input, frame export and the pygame window."""

from .image_io import grid_to_image, load_pixels, save_frame
from .pygame_render import PygameGridRenderer, is_available

__all__ = [
    "load_pixels",
    "grid_to_image",
    "save_frame",
    "PygameGridRenderer",
    "is_available",
]
