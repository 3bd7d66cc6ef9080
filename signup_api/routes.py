"""
HTTP routes for the signup API.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from pydantic import ValidationError

from signup_api.auth import require_authorization
from signup_api.db import (
    DatastoreUnavailableError,
    DbClient,
    DuplicateEmailError,
    InvalidUserDataError,
)
from signup_api.dependencies import get_db_client
from signup_api.errors import (
    DatastoreUnavailableApiError,
    SignupConflictError,
    SignupValidationError,
)
from signup_api.schemas import (
    ProfileResponse,
    PublicUser,
    SignupRequest,
    SignupResponse,
)
from signup_api.security import hash_password

logger = logging.getLogger(__name__)

router = APIRouter()


async def signup_payload(request: Request) -> SignupRequest:
    """
    Parse the raw body so malformed input maps to the signup error contract
    instead of FastAPI's default 422.
    """
    body = await request.body()
    try:
        return SignupRequest.model_validate_json(body)
    except ValidationError as exc:
        logger.warning(
            "Rejected signup payload: %s",
            "; ".join(err["msg"] for err in exc.errors()),
        )
        raise SignupValidationError() from exc


@router.post("/signup", response_model=SignupResponse, status_code=201)
def signup(
    payload: SignupRequest = Depends(signup_payload),
    db: DbClient = Depends(get_db_client),
):
    try:
        user = db.create_user(
            name=payload.name,
            email=payload.email,
            password_hash=hash_password(payload.password),
        )
    except DuplicateEmailError as exc:
        logger.warning("Signup conflict: %s", exc)
        raise SignupConflictError() from exc
    except InvalidUserDataError as exc:
        logger.warning("Signup rejected by datastore: %s", exc)
        raise SignupValidationError() from exc
    except DatastoreUnavailableError as exc:
        logger.exception("Signup failed, datastore unavailable")
        raise DatastoreUnavailableApiError() from exc

    logger.info("Created user %s", user.id)
    return SignupResponse(
        message="User created successfully",
        user=PublicUser(**user.as_public_dict()),
    )


@router.get("/me", response_model=ProfileResponse)
def me(authorization: str = Depends(require_authorization)):
    """
    Echo the caller's Authorization header.

    The header is not decoded, so no user identity is resolved here.
    """
    return ProfileResponse(message="You are authorized!", authHeader=authorization)
