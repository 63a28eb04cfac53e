import numpy as np

from .logger import get_logger

logger = get_logger(__name__)


class DoubleBuffer:
    """
    Two owned pages with a read cursor and a write cursor.
    ``swap`` exchanges which page plays which role; page contents are never copied.
    """
    def __init__(self, front, back):
        if front is back:
            raise ValueError("DoubleBuffer pages must be distinct objects")
        if np.shape(front) != np.shape(back):
            raise ValueError(f"page shapes differ: {np.shape(front)} vs {np.shape(back)}")
        self.pages = [front, back]
        self.read_idx = 0
        self.write_idx = 1
        self.swaps = 0

    @classmethod
    def mirrored(cls, page):
        """Build a buffer whose write page starts as a copy of ``page``."""
        return cls(page, page.copy())

    @property
    def current(self):
        return self.pages[self.read_idx]

    @property
    def next(self):
        return self.pages[self.write_idx]

    def swap(self):
        self.read_idx, self.write_idx = self.write_idx, self.read_idx
        self.swaps += 1
        logger.debug(f"DoubleBuffer.swap -> read={self.read_idx} write={self.write_idx}")

    def for_read(self, callback):
        """Invoke ``callback(page)`` on the page currently labelled ``current``."""
        return callback(self.current)

    def for_write(self, callback):
        """Invoke ``callback(page)`` on the page currently labelled ``next``."""
        return callback(self.next)
