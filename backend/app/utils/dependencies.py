"""
FastAPI Depends() helpers for bearer-token authentication.

get_current_user() requires a valid token and returns the User row.
get_job_actor() is what the jobs router depends on: it requires a token only
when JOBS_REQUIRE_AUTH is enabled and otherwise lets the request through as None.
"""
import logging

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from .. import config
from ..database import get_db
from ..models.user import User
from .error_handlers import get_error_message, handle_database_error
from .jwt import decode_access_token

logger = logging.getLogger(__name__)


def _bearer_token(request: Request) -> str | None:
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    token = _bearer_token(request)
    if not token:
        raise HTTPException(status_code=401, detail=get_error_message("token_required"))

    payload = decode_access_token(token)
    if payload is None:
        raise HTTPException(status_code=401, detail=get_error_message("not_authorized"))

    try:
        user = db.query(User).filter(User.id == payload["sub"]).first()
    except Exception as e:
        raise handle_database_error(e, "loading token user")

    if not user:
        # Signature was fine but the account no longer exists.
        logger.warning("Token subject %s does not match any user", payload["sub"])
        raise HTTPException(status_code=401, detail=get_error_message("not_authorized"))

    return user


def get_job_actor(request: Request, db: Session = Depends(get_db)) -> User | None:
    if not config.JOBS_REQUIRE_AUTH:
        return None
    return get_current_user(request, db)
