"""Error kinds raised by the hiring pipeline.

Every failure carries a stable machine-readable ``kind`` plus a human
readable message. The HTTP layer maps kinds to status codes; the pipeline
itself never knows about transports.
"""


class PipelineError(Exception):
    kind = "pipeline_error"

    def __init__(self, message, **context):
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self):
        body = {"success": False, "error": self.kind, "message": self.message}
        if self.context:
            body["details"] = self.context
        return body


class NotFound(PipelineError):
    kind = "not_found"


class InvalidState(PipelineError):
    kind = "invalid_state"


class InvalidInput(PipelineError):
    kind = "invalid_input"


class Conflict(PipelineError):
    kind = "conflict"


class DeliveryError(PipelineError):
    kind = "delivery_error"


class StorageError(PipelineError):
    kind = "storage_error"


HTTP_STATUS = {
    NotFound.kind: 404,
    InvalidState.kind: 409,
    InvalidInput.kind: 400,
    Conflict.kind: 409,
    DeliveryError.kind: 502,
    StorageError.kind: 503,
}
