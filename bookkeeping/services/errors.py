"""
Service-layer exceptions.

All of them are ValueErrors, so a caller that only cares about
"the request was invalid" can keep catching ValueError. Routes
distinguish NotFoundError to answer 404 instead of 400.
"""


class NotFoundError(ValueError):
    pass


class UnbalancedEntryError(ValueError):
    pass


class EntryStateError(ValueError):
    """The entry's status does not allow the requested operation."""
