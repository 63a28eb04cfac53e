"""Exception types shared across the package.

Startup failures (image decode, display creation, bad configuration) are
fatal: the CLI logs them and exits before a window appears. Nothing in the
steady-state simulation raises.
"""


class TextureMemoryError(Exception):
    pass


class ImageLoadError(TextureMemoryError):
    pass


class DisplayError(TextureMemoryError):
    pass


class EmptyMemoryError(TextureMemoryError):
    pass


class ConfigError(TextureMemoryError):
    pass


class FrameExportError(TextureMemoryError):
    pass
