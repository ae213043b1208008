"""Typed, nested query-string extraction for FastAPI."""

from queryst.errors import (
    QueryStPayloadError,
    QueryStResponseError,
    QueryStTypeError,
    QueryStValueError,
    query_st_exception_handler,
    query_st_response_handler,
    register_exception_handlers,
)
from queryst.extractor import CONFIG_STATE_KEY, QuerySt, QueryStConfig, query_st

__all__ = [
    "CONFIG_STATE_KEY",
    "QuerySt",
    "QueryStConfig",
    "query_st",
    # Errors
    "QueryStPayloadError",
    "QueryStResponseError",
    "QueryStTypeError",
    "QueryStValueError",
    "query_st_exception_handler",
    "query_st_response_handler",
    "register_exception_handlers",
]
