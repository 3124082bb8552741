"""
Authentication endpoints.
Registration, login (bearer token issue) and password reset via security answer.
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from basicauth.core.database import get_db
from basicauth.core.exceptions import (
    InvalidCredentialsError,
    InvalidSecurityAnswerError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from basicauth.core.security import create_access_token, hash_secret, verify_secret
from basicauth.models.user import User
from basicauth.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account. Password and security answer are stored hashed."""
    user = User(
        username=request.username,
        email=request.email,
        password_hash=hash_secret(request.password),
        security_question=request.security_question,
        security_answer_hash=hash_secret(request.security_answer),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Registration rejected for {request.email}: {e.orig}")
        raise UserAlreadyExistsError() from e

    logger.info("Registered user id=%d username=%s", user.id, user.username)
    return Response(status_code=status.HTTP_201_CREATED)


@router.post("/login", response_model=LoginResponse)
async def login(request: LoginRequest, db: Session = Depends(get_db)):
    """Exchange email and password for a bearer token."""
    user = db.query(User).filter(User.email == request.email).first()
    if not user or not verify_secret(request.password, user.password_hash):
        raise InvalidCredentialsError()

    logger.info("Issued token for user id=%d", user.id)
    return LoginResponse(token=create_access_token(user.id))


@router.post("/forgot-password")
async def forgot_password(request: ForgotPasswordRequest, db: Session = Depends(get_db)):
    """Replace the password once the security answer checks out."""
    user = db.query(User).filter(User.email == request.email).first()
    if not user:
        raise UserNotFoundError()

    if not verify_secret(request.security_answer, user.security_answer_hash):
        raise InvalidSecurityAnswerError()

    user.password_hash = hash_secret(request.new_password)
    db.commit()

    logger.info("Password reset for user id=%d", user.id)
    return Response(status_code=status.HTTP_200_OK)
