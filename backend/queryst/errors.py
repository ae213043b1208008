"""Errors raised while extracting a typed value from a request query string.

Two failure kinds exist and each carries exactly one underlying cause:

- ``QueryStValueError``: the raw query string was rejected by the parser.
- ``QueryStTypeError``: the parsed value could not be decoded into the
  requested type.

Both map to HTTP 400 Bad Request by default.
"""

from fastapi import FastAPI, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse


class QueryStPayloadError(Exception):
    """Base class for query extraction failures.

    Attributes:
        cause: The parser or decoder exception that triggered the failure.
        status_code: HTTP status used by the default conversion.
    """

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, cause: Exception) -> None:
        super().__init__(cause)
        self.cause = cause

    def __str__(self) -> str:
        return str(self.cause)

    def to_http_exception(self) -> HTTPException:
        """Convert to the framework's default error representation."""
        return HTTPException(status_code=self.status_code, detail=str(self))


class QueryStValueError(QueryStPayloadError):
    """The raw query string could not be parsed into a generic value."""

    def __str__(self) -> str:
        return f"QuerySt invalid query provided: {self.cause!r}"


class QueryStTypeError(QueryStPayloadError):
    """The parsed value does not match the shape of the target type."""

    def __str__(self) -> str:
        return f"QuerySt error in deserializing to type: {self.cause}"


async def query_st_exception_handler(
    request: Request, exc: QueryStPayloadError
) -> JSONResponse:
    """Render an uncaught QueryStPayloadError as a JSON error response.

    Covers routes that call ``QuerySt.from_query`` directly instead of
    going through the dependency.
    """
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


class QueryStResponseError(HTTPException):
    """Carries a response built by a custom error handler.

    ``query_st_response_handler`` sends ``response`` unchanged. Apps that do
    not register it still get the response's status code with FastAPI's
    default JSON body.
    """

    def __init__(self, response: Response) -> None:
        super().__init__(status_code=response.status_code)
        self.response = response


async def query_st_response_handler(
    request: Request, exc: QueryStResponseError
) -> Response:
    """Send the response produced by a custom error handler as-is."""
    return exc.response


def register_exception_handlers(app: FastAPI) -> None:
    """Install the QuerySt exception handlers on ``app``."""
    app.add_exception_handler(QueryStPayloadError, query_st_exception_handler)
    app.add_exception_handler(QueryStResponseError, query_st_response_handler)
