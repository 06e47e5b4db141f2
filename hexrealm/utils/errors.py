"""Exception types raised by the simulation core."""


class InvalidInput(ValueError):
    """Raised when a caller breaks a component's input contract.

    Game-logic problems (missing orders, stale targets) never raise; they
    are written to the turn's resolution logs instead. This error is
    reserved for structurally invalid input such as an empty candidate
    list for a weighted choice or a map grid whose coordinates do not
    match their positions.
    """


class ThemeValidationError(ValueError):
    """Raised when a theme package fails schema validation."""
