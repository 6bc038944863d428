"""Error hierarchy for calls against the debt backend."""


class ApiError(Exception):
    """Base exception for all backend call failures."""


class TransportError(ApiError):
    """Raised when the backend could not be reached (connection, timeout)."""


class HttpStatusError(ApiError):
    """Raised when the backend answers with a non-2xx status."""

    def __init__(self, status_code: int, method: str, url: str, body: str = "") -> None:
        self.status_code = status_code
        self.method = method
        self.url = url
        self.body = body
        super().__init__(f"{method} {url} failed with status {status_code}: {body}")

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class DecodeError(ApiError):
    """Raised when a response body was expected to be JSON and is not."""


class EntityNotFoundError(ApiError):
    """Raised when an operation needs an existing entity and there is none."""
