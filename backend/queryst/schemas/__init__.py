"""Pydantic schemas."""

from queryst.schemas.examples import AuthRequest, Id, ResponseType, User

__all__ = [
    "AuthRequest",
    "Id",
    "ResponseType",
    "User",
]
