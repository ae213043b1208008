"""Example routes showing the QuerySt extractor in use.

Each route decodes its query string into a schema from
``queryst.schemas.examples``. ``/strict/users`` binds its own error handler;
``/lookup`` calls ``QuerySt.from_query`` directly and relies on the app's
exception handler.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status

from queryst.errors import QueryStPayloadError
from queryst.extractor import QuerySt, QueryStConfig, query_st
from queryst.schemas.examples import AuthRequest, Id, User

router = APIRouter(tags=["examples"])


def _conflict(err: QueryStPayloadError, request: Request) -> HTTPException:
    """Answer malformed user queries with 409 Conflict."""
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(err))


STRICT_CONFIG = QueryStConfig().error_handler(_conflict)


@router.get("/index.html")
async def index(
    info: Annotated[QuerySt[AuthRequest], Depends(query_st(AuthRequest))],
) -> dict:
    """Authorization endpoint, called only when the query has ``id`` and ``response_type``."""
    return {
        "message": (
            f"Authorization request for client with id={info.id} "
            f"and type={info.response_type.value}!"
        ),
    }


@router.get("/users")
async def get_user(
    user: Annotated[QuerySt[User], Depends(query_st(User))],
) -> dict:
    """Echo a user decoded from repeated (``sib[]``) and bracketed (``abblities[x]``) keys."""
    return user.into_inner().model_dump()


@router.get("/strict/users")
async def get_user_strict(
    user: Annotated[QuerySt[User], Depends(query_st(User, config=STRICT_CONFIG))],
) -> dict:
    """Same as ``/users`` but failures answer 409 instead of 400."""
    return user.into_inner().model_dump()


@router.get("/lookup")
async def lookup(request: Request) -> dict:
    """Decode the query inside the handler; errors reach the app exception handler."""
    ident = QuerySt.from_query(request.url.query, Id)
    return {"id": ident.id}
