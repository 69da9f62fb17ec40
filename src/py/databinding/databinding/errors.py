class FetchError(Exception):
    """Base class for every way a user-list fetch can fail."""


class TransportError(FetchError):
    """The request never produced a response (connectivity or IO failure)."""


class EmptyBodyError(FetchError):
    """The response carried no body."""


class DecodeError(FetchError):
    """The body is not a JSON array of well-formed user records."""
