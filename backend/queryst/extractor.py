"""Typed query-string extraction for FastAPI routes.

The raw query string is parsed with ``qs_codec`` into a generic value (nested
dicts and lists, so ``sib[]=a&sib[]=b`` and ``abblities[reads]=books`` work),
which pydantic then validates into the requested type.

Usage::

    from typing import Annotated

    from fastapi import Depends, FastAPI
    from pydantic import BaseModel

    from queryst import QuerySt, query_st

    class AuthRequest(BaseModel):
        id: int
        response_type: ResponseType

    app = FastAPI()

    @app.get("/index.html")
    async def index(info: Annotated[QuerySt[AuthRequest], Depends(query_st(AuthRequest))]):
        return f"Authorization request for client with id={info.id}"

Failures become ``HTTPException(400)`` unless a ``QueryStConfig`` with an
error handler is bound to the route or stored on ``app.state``.
"""

import functools
import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Generic, Iterator, TypeVar

from fastapi import Request, Response
from pydantic import TypeAdapter, ValidationError
from qs_codec import DecodeOptions, decode

from queryst.errors import (
    QueryStPayloadError,
    QueryStResponseError,
    QueryStTypeError,
    QueryStValueError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

ErrorHandler = Callable[[QueryStPayloadError, Request], Exception | Response]

# Name of the app.state attribute holding the application-wide config
CONFIG_STATE_KEY = "query_st_config"

# Most key=value pairs accepted in one query string
PARAMETER_LIMIT = 1000

# Queries past the depth or parameter limit are rejected rather than
# silently flattened or truncated. A list may hold every parameter.
PARSE_OPTIONS = DecodeOptions(
    parameter_limit=PARAMETER_LIMIT,
    list_limit=PARAMETER_LIMIT,
    strict_depth=True,
    raise_on_limit_exceeded=True,
)


@functools.lru_cache(maxsize=None)
def _type_adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


@dataclass(frozen=True)
class QueryStConfig:
    """QuerySt extractor configuration.

    Bind one to a route with ``query_st(Model, config=...)`` or set it on
    ``app.state.query_st_config`` to apply it to every route of the app.

    Example::

        config = QueryStConfig().error_handler(
            lambda err, request: HTTPException(status_code=409, detail=str(err))
        )

    The handler may also return a ``Response`` to send as-is, e.g.
    ``PlainTextResponse("bad query", status_code=409)``; this needs
    ``register_exception_handlers(app)``.

    Attributes:
        ehandler: Optional function turning an extraction error into the
            exception raised to FastAPI, or into a response.
            ``None`` means the default 400.
    """

    ehandler: ErrorHandler | None = None

    def error_handler(self, handler: ErrorHandler) -> "QueryStConfig":
        """Return a copy of this config using ``handler`` for failures."""
        return replace(self, ehandler=handler)

    def handle(self, err: QueryStPayloadError, request: Request) -> Exception:
        """Map an extraction error to the exception that should be raised.

        A ``Response`` returned by the handler is wrapped in a
        ``QueryStResponseError``.

        Raises:
            TypeError: If the custom handler returns neither an exception
                nor a response.
        """
        if self.ehandler is None:
            return err.to_http_exception()

        exc = self.ehandler(err, request)
        if isinstance(exc, Response):
            return QueryStResponseError(exc)
        if not isinstance(exc, Exception):
            raise TypeError(
                "QuerySt error handler must return an exception or a response, "
                f"got {type(exc).__name__}"
            )
        return exc


DEFAULT_CONFIG = QueryStConfig()


def _app_config(request: Request) -> QueryStConfig:
    """Look up the application-wide config, falling back to the default."""
    config = getattr(request.app.state, CONFIG_STATE_KEY, None)
    return config if config is not None else DEFAULT_CONFIG


@functools.total_ordering
class QuerySt(Generic[T]):
    """Query string decoded into ``T``.

    Attribute reads and writes are forwarded to the wrapped value, so the
    wrapper can be used as if it were the value itself::

        info = QuerySt.from_query("id=test", Id)
        info.id = "test1"
        assert info.into_inner().id == "test1"
    """

    __slots__ = ("_inner",)

    def __init__(self, inner: T) -> None:
        object.__setattr__(self, "_inner", inner)

    @classmethod
    def from_query(cls, query_str: str, target: type[T]) -> "QuerySt[T]":
        """Parse ``query_str`` and decode it into ``target``.

        Args:
            query_str: Raw query string, without the leading ``?``.
            target: Type to decode into (pydantic model, dataclass,
                TypedDict, builtin container...).

        Raises:
            QueryStValueError: The query string could not be parsed.
            QueryStTypeError: The parsed value does not fit ``target``.
        """
        try:
            value = decode(query_str, PARSE_OPTIONS)
        except (ValueError, IndexError) as e:
            raise QueryStValueError(e) from e

        try:
            return cls(_type_adapter(target).validate_python(value))
        except ValidationError as e:
            raise QueryStTypeError(e) from e

    @classmethod
    def from_request(
        cls,
        request: Request,
        target: type[T],
        config: QueryStConfig | None = None,
    ) -> "QuerySt[T]":
        """Extract ``target`` from the request's query string.

        Args:
            request: Incoming request.
            target: Type to decode into.
            config: Route-bound config. When omitted, the config stored on
                ``app.state`` is used, then the default.

        Raises:
            Exception: Whatever the config's error handler returns, or
                ``HTTPException(400)`` by default.
        """
        if config is None:
            config = _app_config(request)

        try:
            return cls.from_query(request.url.query, target)
        except QueryStPayloadError as err:
            logger.debug(
                "Failed during QuerySt extractor deserialization. Request path: %r",
                request.url.path,
            )
            exc = config.handle(err, request)
            if exc is err:
                raise
            raise exc from err

    @property
    def inner(self) -> T:
        return self._inner

    def into_inner(self) -> T:
        """Deconstruct to the inner value."""
        return self._inner

    def __getattr__(self, name: str) -> Any:
        # Only called when normal lookup fails, i.e. for the inner value's attributes
        if name.startswith("__") or name in QuerySt.__slots__:
            raise AttributeError(name)
        return getattr(self._inner, name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in QuerySt.__slots__ or name.startswith("__"):
            object.__setattr__(self, name, value)
        else:
            setattr(self._inner, name, value)

    def __getitem__(self, key: Any) -> Any:
        return self._inner[key]

    def __setitem__(self, key: Any, value: Any) -> None:
        self._inner[key] = value

    def __contains__(self, item: Any) -> bool:
        return item in self._inner

    def __iter__(self) -> Iterator[Any]:
        return iter(self._inner)

    def __len__(self) -> int:
        return len(self._inner)

    def __bool__(self) -> bool:
        return bool(self._inner)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, QuerySt):
            other = other._inner
        return self._inner == other

    def __lt__(self, other: object) -> bool:
        if isinstance(other, QuerySt):
            other = other._inner
        return self._inner < other

    __hash__ = None

    def __repr__(self) -> str:
        return repr(self._inner)

    def __str__(self) -> str:
        return str(self._inner)


def query_st(
    target: type[T], config: QueryStConfig | None = None
) -> Callable[[Request], QuerySt[T]]:
    """Build a FastAPI dependency extracting ``target`` from the query string.

    Args:
        target: Type to decode into.
        config: Optional route-bound config overriding ``app.state``.
    """

    def dependency(request: Request) -> QuerySt[T]:
        return QuerySt.from_request(request, target, config)

    dependency.__name__ = f"query_st_{getattr(target, '__name__', 'value')}"
    return dependency
