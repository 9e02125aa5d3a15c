from __future__ import annotations


class ChartvecError(Exception):
    """Base class for chartvec rendering errors."""


class UnsupportedElementError(ChartvecError, TypeError):
    """A node outside the closed scene-graph variant set reached the renderer."""


class PathCommandError(ChartvecError, ValueError):
    """A path command cannot be serialized."""


class RowRemapError(ChartvecError, ValueError):
    """A sub-chart row index has no counterpart in the container's rows."""
