# errors.py
"""Exceptions raised by the renderer.

Numerical edge cases (degenerate rays, exhausted bounce budget) are never
errors; they resolve to black or a miss. Only configuration problems,
collaborator failures and pipeline logic defects surface here.
"""


class PathTracerError(Exception):
    """Base class for every error raised by pathtracer."""


class ConfigError(PathTracerError):
    """Invalid render or camera settings."""


class RenderError(PathTracerError):
    """A worker failed or the pixel buffer was written inconsistently."""


class RenderCancelled(PathTracerError):
    """The render was cancelled before every pixel was computed."""


class DisplayError(PathTracerError):
    """The preview surface could not be created or updated."""


class EncoderError(PathTracerError):
    """The finished image could not be written."""
