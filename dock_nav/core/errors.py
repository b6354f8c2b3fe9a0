"""Exception types raised by the navigation core."""


class DockNavError(Exception):
    """Base class for dock_nav errors."""


class InvalidState(DockNavError, RuntimeError):
    """An operation needs a current route leg and there is none.

    Always a caller logic error: check ``is_active()`` first.
    """


class GeometryError(DockNavError, ValueError):
    """A target distance or bearing cannot be computed right now.

    Raised when no target is in view or the target sits at or below the
    sensor's horizon. Callers usually retry on a later tick.
    """
