class FrameError(ValueError):
    """Base error for frame of discernment handling."""


class UnknownEventError(FrameError):
    """An element was looked up that is not part of the frame."""


class FrameTooLargeError(FrameError):
    """Frame exceeds the size the dense tables can be built for."""
