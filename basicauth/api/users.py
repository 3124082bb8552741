"""
Users API endpoints.
Lists registered accounts to holders of a valid bearer token.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from basicauth.core.database import get_db
from basicauth.core.exceptions import UnauthorizedError
from basicauth.core.security import decode_access_token
from basicauth.models.user import User
from basicauth.schemas.user import UserResponse

router = APIRouter(prefix="/users", tags=["Users"])

# auto_error is off so that a missing header and "Bearer " both yield 401
bearer_scheme = HTTPBearer(auto_error=False)


async def require_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> dict:
    """Reject the request unless it carries a valid, unexpired bearer token."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()

    claims = decode_access_token(credentials.credentials)
    if claims is None:
        raise UnauthorizedError()
    return claims


@router.get("", response_model=list[UserResponse])
async def list_users(
    claims: dict = Depends(require_token),
    db: Session = Depends(get_db),
):
    """List all registered users, oldest first."""
    users = db.query(User).order_by(User.id).all()
    return [
        UserResponse(
            id=user.id,
            username=user.username,
            email=user.email,
            created_at=user.created_at,
        )
        for user in users
    ]
