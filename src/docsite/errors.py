"""Error taxonomy shared by resolvers and route handlers."""


class DocsiteError(Exception):
    """Base class for failures that map onto an HTTP status.

    Attributes:
        status_code: HTTP status the error is reported with.
        detail: Optional extra context included in the response body.
    """

    status_code = 500

    def __init__(self, message: str, detail: str | None = None) -> None:
        """Initialize the error.

        Args:
            message: Short client-facing error description.
            detail: Optional extra context.
        """
        super().__init__(message)
        self.message = message
        self.detail = detail


class ClientInputError(DocsiteError):
    """A required parameter is missing or malformed."""

    status_code = 400


class InvalidURLError(ClientInputError):
    """A URL parameter cannot be parsed as an absolute http(s) URL."""


class NotFoundError(DocsiteError):
    """The requested resource does not exist."""

    status_code = 404


class UpstreamFailure(DocsiteError):
    """A dependent external service answered with an error."""

    status_code = 502


class DocumentReadError(DocsiteError):
    """A document exists but could not be read from disk.

    Attributes:
        path: Relative document path.
        code: Optional OS error code (e.g., EACCES).
    """

    status_code = 500

    def __init__(self, message: str, path: str, code: str | None = None) -> None:
        """Initialize document read error.

        Args:
            message: Error description.
            path: Relative document path that failed.
            code: Optional OS error code.
        """
        super().__init__(message)
        self.path = path
        self.code = code


class UnexpectedFailure(DocsiteError):
    """Any uncategorised failure while serving a request."""

    status_code = 500
