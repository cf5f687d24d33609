"""Exceptions raised by the classifier adapters.

Each carries the message shown to the user and the HTTP status the API layer
answers with.
"""

NO_RESPONSE_MESSAGE = "No response received from the server. Please check your connection."
REQUEST_SETUP_MESSAGE = "Error setting up the request. Please try again."
INVALID_FORMAT_MESSAGE = "Invalid response format from the server."
INVALID_PREDICTION_MESSAGE = "Invalid prediction result received from the server."


class ClassifierError(Exception):
    """Base class for failures talking to a hosted classifier."""

    http_status = 502

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UpstreamStatusError(ClassifierError):
    """The classifier answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: str) -> None:
        super().__init__(f"Server error: {status_code} - {reason}")
        self.status_code = status_code


class NoResponseError(ClassifierError):
    """The request was sent but no response came back."""

    def __init__(self, message: str = NO_RESPONSE_MESSAGE) -> None:
        super().__init__(message)


class RequestSetupError(ClassifierError):
    """The request could not be built or dispatched."""

    def __init__(self, message: str = REQUEST_SETUP_MESSAGE) -> None:
        super().__init__(message)


class InvalidPredictionError(ClassifierError):
    """The classifier answered, but with a body we refuse to interpret."""


class UpstreamReportedError(ClassifierError):
    """The classifier explicitly reported an error in its body."""
