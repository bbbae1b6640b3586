"""Exception hierarchy shared by the server and the client session."""


class AssistantError(Exception):
    """Base class for all analysis errors."""


class InvalidRequest(AssistantError):
    """Unrecognized analysis type or structurally malformed request body.

    Raised before any call reaches the completion engine and never retried.
    """


class CompletionError(AssistantError):
    """The completion engine failed or returned an unusable response."""


class TransportError(AssistantError):
    """The HTTP call to ``/analyze`` failed (client side only)."""
