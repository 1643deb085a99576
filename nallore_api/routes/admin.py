"""
Admin session routes.
The admin client exchanges its password for the token it then sends in
the X-Admin-Token header.
"""
from fastapi import APIRouter, Depends, Request
import logging

from nallore_api.errors import Unauthorized
from nallore_api.schemas import LoginRequest, LoginResponse
from nallore_api.utils.auth import Authenticator, get_authenticator
from nallore_api.utils.rate_limit import limiter, RATE_LIMITS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/login", response_model=LoginResponse)
@limiter.limit(RATE_LIMITS["login"])
async def login(
    request: Request,
    credentials: LoginRequest,
    authenticator: Authenticator = Depends(get_authenticator)
):
    """
    Admin login.
    Rate limited per client IP to slow down password guessing.

    Args:
        request: FastAPI request object (used by the rate limiter)
        credentials: Login body containing the admin password
        authenticator: Configured authenticator (injected by dependency)

    Returns:
        LoginResponse: Token for the X-Admin-Token header

    Raises:
        Unauthorized: 401 if the password is wrong
    """
    token = authenticator.login(credentials.password)
    if token is None:
        logger.warning("Failed admin login attempt")
        raise Unauthorized("Invalid password")

    logger.info("Admin login successful")
    return LoginResponse(token=token)
