"""
Application error taxonomy.

Every error carries a short machine code and a human message; the API layer
renders them into the ``CommonResponse`` envelope.
"""


class AppError(Exception):
    code = "Error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Caller input failed a flow precondition; no remote call was made."""
    code = "ValidationError"
    status_code = 422


class GenerationFailed(AppError):
    """The model call errored or its output did not match the flow schema."""
    code = "GenerationFailed"
    status_code = 502

    def __init__(self, flow: str, message: str):
        super().__init__(f"{flow}: {message}")
        self.flow = flow


class PersistenceFailed(AppError):
    code = "PersistenceFailed"
    status_code = 500


class NotFound(AppError):
    code = "NotFound"
    status_code = 404
