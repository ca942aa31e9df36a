"""Error kinds raised by the board and the HTTP status each one maps to."""
import enum


class ErrorKind(enum.Enum):
    NOT_FOUND = "not_found"
    STORE = "store"
    RENDER = "render"
    SCHEMA = "schema"

    @property
    def status_code(self):
        if self is ErrorKind.NOT_FOUND:
            return 404
        return 500


class BoardError(Exception):
    """Base error; the app turns it into ``{"error": message}`` with the kind's status."""

    kind = ErrorKind.STORE
    default_message = "Internal error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def status_code(self):
        return self.kind.status_code


class PostNotFound(BoardError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Post not found"


class StoreError(BoardError):
    kind = ErrorKind.STORE
    default_message = "Database error"


class RenderError(BoardError):
    kind = ErrorKind.RENDER
    default_message = "Template error"


class SchemaError(BoardError):
    kind = ErrorKind.SCHEMA
    default_message = "Schema setup failed"
