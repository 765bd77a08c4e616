from fastapi import APIRouter, Depends, status, Request
from sqlalchemy import or_
from sqlalchemy.orm import Session
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.exc import SQLAlchemyError
import logging

from bookshop.database import get_db
from bookshop.models.users import User
from bookshop.schemas.user import UserCreate
from bookshop.core.errors import Conflict, StorageError, Unauthorized, ValidationError
from bookshop.core.hashing import hash_password, verify_password
from bookshop.core.jwt import create_access_token
from bookshop.core.rate_limiter import limiter

router = APIRouter(prefix="/auth", tags=["Authentication"])

logger = logging.getLogger("bookshop.auth")

COMMON_PASSWORDS = {
    "password",
    "password123",
    "12345678",
    "qwerty123",
    "admin123",
}


def _token_response(user: User) -> dict:
    token = create_access_token(
        data={"sub": str(user.id), "name": user.name, "email": user.email}
    )

    return {
        "access_token": token,
        "token_type": "bearer",
        "user": {
            "id": user.id,
            "name": user.name,
            "email": user.email,
        },
    }


# ---------------- SIGNUP ----------------
@router.post("/signup", status_code=status.HTTP_201_CREATED)
@limiter.limit("3/minute")
def signup(request: Request, user_data: UserCreate, db: Session = Depends(get_db)):
    if user_data.password.lower() in COMMON_PASSWORDS:
        raise ValidationError("Password is too common. Please choose a stronger password.")

    if user_data.password.isdigit():
        raise ValidationError("Password cannot be numbers only.")

    existing_user = (
        db.query(User)
        .filter(or_(User.email == user_data.email, User.name == user_data.name))
        .first()
    )

    if existing_user:
        field = "email" if existing_user.email == user_data.email else "name"
        raise Conflict(f"User with this {field} already exists")

    try:
        user = User(
            name=user_data.name,
            email=user_data.email,
            password_hash=hash_password(user_data.password),
        )
        db.add(user)
        db.commit()
        db.refresh(user)

    except SQLAlchemyError:
        db.rollback()
        logger.exception("Signup failed for %s", user_data.name)
        raise StorageError("Unable to create account")

    logger.info("User %s signed up", user.name)

    # Signed up users are logged in straight away
    return {"message": "User created successfully", **_token_response(user)}

# ---------------- LOGIN (TOKEN-BASED) ----------------
@router.post("/login")
@limiter.limit("5/minute")
def login(
    request: Request,
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    user = db.query(User).filter(User.name == form_data.username).first()

    if not user or not verify_password(form_data.password, user.password_hash):
        raise Unauthorized("Invalid credentials")

    return _token_response(user)
