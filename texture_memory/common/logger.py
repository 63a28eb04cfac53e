import logging
import os

ROOT_LOGGER = "texture_memory"
LOG_LEVEL_ENV = "TEXTURE_MEMORY_LOG_LEVEL"


def _level_from_env():
    level_name = os.getenv(LOG_LEVEL_ENV, "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    if not isinstance(level, int):
        return logging.WARNING
    return level


def get_logger(name=None):
    """Return a logger under the package root, configuring the root once."""
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter('[%(asctime)s][%(levelname)s][%(name)s] %(message)s')
        handler.setFormatter(formatter)
        root.addHandler(handler)
        root.setLevel(_level_from_env())
    if not name or name == ROOT_LOGGER:
        return root
    if not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def set_level(level):
    get_logger().setLevel(level)
