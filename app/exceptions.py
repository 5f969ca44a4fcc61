class AnalysisError(Exception):
    """Base error for failures talking to or interpreting the language service."""


class RemoteUnavailableError(AnalysisError):
    """The language service could not be reached or rejected the request."""


class MalformedResponseError(AnalysisError):
    """The language service answered with data that cannot be normalized."""
