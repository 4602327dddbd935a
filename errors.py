"""Failure type shared by the public conversion entry points."""


class ConversionError(ValueError):
    """
    Raised instead of returning partial output.

    ``reason`` is a short machine-readable code (``no_segments``,
    ``invalid_range``, ...); the message is for humans.
    """

    def __init__(self, reason: str, message: str = ""):
        super().__init__(message or reason)
        self.reason = reason
        self.message = message or reason

    def to_dict(self) -> dict:
        return {"error": self.reason, "message": self.message}
