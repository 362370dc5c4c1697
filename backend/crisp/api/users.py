from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from crisp.core.db import get_db
from crisp.models import User
from crisp.schemas.user import UserCreate, UserOut

router = APIRouter(prefix="/api/users", tags=["users"])

@router.post("", response_model=UserOut)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    u = User(name=payload.name, email=payload.email, role=payload.role)
    db.add(u)
    db.commit()
    db.refresh(u)
    return u
