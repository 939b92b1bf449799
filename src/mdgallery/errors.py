"""Exceptions raised by mdgallery."""


class GalleryError(Exception):
    """Base class for mdgallery errors."""


class MalformedMotifError(GalleryError):
    """A heading at the configured level is not a complete open/content/close triplet."""

    def __init__(self, position: int, reason: str):
        self.position = position
        self.reason = reason
        super().__init__(f"Malformed heading at token {position}: {reason}")


class TokenSequenceError(GalleryError):
    """An insertion cannot be applied without corrupting the token sequence."""
