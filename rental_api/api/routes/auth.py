"""Authentication routes."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger

from rental_api.api.dependencies import Users, get_token_service
from rental_api.modules.auth import Role, TokenResponse, TokenService
from rental_api.modules.users import RegisterResponse, UserCreate, UserLogin

auth_log = logger.bind(module="Auth")

router = APIRouter(tags=["Authentication"])


@router.get("/dummyLogin", response_model=TokenResponse)
async def dummy_login(
    tokens: Annotated[TokenService, Depends(get_token_service)],
    user_type: Role = Query(..., description="client or moderator"),
) -> dict:
    """
    Issue a token for a fresh user id with the requested role.

    Args:
        user_type: Role to put into the token
    """
    user_id = uuid.uuid4()
    token, expires_in = tokens.issue(user_id, user_type)
    auth_log.info(f"Issued dummy {user_type} token for {user_id}")
    return {"token": token, "expires_in": expires_in}


@router.post("/register", status_code=201, response_model=RegisterResponse)
async def register(data: UserCreate, repo: Users) -> dict:
    """
    Register a new user.

    Args:
        data: Email, password and user type

    Returns:
        The new user's id, used to log in
    """
    user = await repo.create(data.email, data.password, data.user_type)
    if not user:
        raise HTTPException(
            status_code=400, detail=f"user with email {data.email} already exists"
        )
    return {"user_id": user.user_id}


@router.post("/login", response_model=TokenResponse)
async def login(
    data: UserLogin,
    repo: Users,
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> dict:
    """
    Login with user id and password.

    Args:
        data: User id and password
    """
    user = await repo.authenticate(data.id, data.password)
    if not user:
        raise HTTPException(status_code=400, detail="invalid id or password")

    token, expires_in = tokens.issue(user.user_id, user.user_type)
    auth_log.info(f"User {user.user_id} logged in as {user.user_type}")
    return {"token": token, "expires_in": expires_in}
