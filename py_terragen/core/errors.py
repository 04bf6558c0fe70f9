"""Exception types raised by the world generation core."""


class TerragenError(Exception):
    """Base class for world generation failures."""


class InvariantViolationError(TerragenError):
    """A structural invariant of the world model was broken.

    This always indicates a bug in a generator stage and aborts the run.
    """


class InvalidStateError(TerragenError):
    """An operation was attempted on an object in the wrong state.

    Examples are adding a tile to a cluster that already contains it,
    removing a tile that is not present, or mutating a frozen collection.
    """
