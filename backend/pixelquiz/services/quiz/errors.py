class QuizError(Exception):
    """Base class for rejected client events."""


class PreconditionFailed(QuizError):
    """A teacher action whose guard is not met. Reported to the sender."""

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message

    def to_dict(self):
        return {'code': 'precondition_failed', 'reason': self.reason, 'message': self.message}


class InvalidJoin(QuizError):
    """A join attempted while joining is closed. Reported to the joiner."""

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message

    def to_dict(self):
        return {'reason': self.reason, 'message': self.message}


class Unauthorized(QuizError):
    """Event from a connection lacking the needed role. Ignored silently."""
