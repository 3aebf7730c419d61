"""Domain exceptions."""


class StratumError(Exception):
    """Base exception for Stratum."""

    pass


class PermissionDenied(StratumError):
    """User does not have permission for the requested action."""

    pass


class NotFound(StratumError):
    """Requested permission or assignment was not found."""

    pass


class InvalidArgument(StratumError):
    """Call arguments are inconsistent for the requested level or operation."""

    pass


class StoreUnavailable(StratumError):
    """Backing store could not be reached or failed mid-operation."""

    pass
