from .errors import FrameError, FrameTooLargeError, UnknownEventError
from .index import MAX_FRAME_SIZE, EventIndex

__all__ = [
    "EventIndex",
    "MAX_FRAME_SIZE",
    "FrameError",
    "FrameTooLargeError",
    "UnknownEventError",
]
