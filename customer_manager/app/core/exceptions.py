"""Customer store exceptions.

Raised by the service layer.  The web endpoints translate them into
HTTP status codes and the console menu logs them; neither lets one
escape.
"""


class ValidationError(Exception):
    """A required customer field is missing or empty.

    Raised before any database I/O takes place.
    """


class StoreError(Exception):
    """The database could not complete the operation.

    Wraps the underlying driver error (malformed identifier, lost
    connection, server selection timeout) as ``__cause__``.
    """
