"""Pydantic schemas decoded from query strings by the example routes."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ResponseType(str, Enum):
    """OAuth-style response types accepted by the authorization route."""

    TOKEN = "Token"
    CODE = "Code"


class AuthRequest(BaseModel):
    """Query for ``/index.html?id=64&response_type=Code``."""

    id: int
    response_type: ResponseType


class Id(BaseModel):
    """Single required string identifier."""

    id: str


class User(BaseModel):
    """Query with repeated and bracketed keys.

    ``name=test&sib[]=hasan&sib[]=ahmad&abblities[reads]=books``
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    siblings: list[str] = Field(alias="sib")
    abblities: dict[str, str]

    def __str__(self) -> str:
        return f"{self.name}, s:{len(self.siblings)} +:{len(self.abblities)}"
