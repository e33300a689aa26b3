from typing import Optional


class AssessmentError(Exception):
    """Base de todos los errores que se propagan hasta el run."""


class TransportError(AssessmentError):
    retryable = False

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class RateLimited(TransportError):
    retryable = True

    def __init__(self, message: str = "Rate limited", status: Optional[int] = 429):
        super().__init__(message, status)


class ServerError(TransportError):
    retryable = True


class RequestFailed(TransportError):
    pass


class AssessmentAborted(AssessmentError):
    pass
