# bookshop/core/auth.py

from fastapi import Depends
from sqlalchemy.orm import Session

from bookshop.database import get_db
from bookshop.models.users import User
from bookshop.core.errors import Unauthorized
from bookshop.core.jwt import decode_access_token
from bookshop.core.oauth2 import oauth2_scheme


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
):
    payload = decode_access_token(token)

    if payload is None:
        raise Unauthorized("Invalid or expired token")

    user_id = payload.get("sub")

    if user_id is None or not str(user_id).isdigit():
        raise Unauthorized("Invalid token payload")

    user = db.query(User).filter(User.id == int(user_id)).first()

    if user is None:
        raise Unauthorized("User not found")

    return user
