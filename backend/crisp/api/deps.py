from fastapi import Depends, Header
from sqlalchemy.orm import Session

from crisp.core.db import get_db
from crisp.core.errors import NotFoundError
from crisp.models import User

def get_current_user(x_user_id: int = Header(...), db: Session = Depends(get_db)) -> User:
    user = db.get(User, x_user_id)
    if not user:
        raise NotFoundError("User not found")
    return user
