from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.deps import get_db, get_current_user
from app.core.logging import logger
from app.schemas.auth import LoginIn, TokenOut, UserOut
from app.crud.users import get_active_user
from app.core.security import verify_password, create_access_token

router = APIRouter()

@router.post("/login", response_model=TokenOut)
def login(data: LoginIn, db: Session = Depends(get_db)):
    user = get_active_user(db, data.login)
    if user is None or not verify_password(data.password, user.password_hash):
        logger.info("login_rejected", login=data.login)
        raise HTTPException(status_code=401, detail="Invalid credentials")
    token = create_access_token(sub=user.login, user_id=user.id, role=user.role)
    return TokenOut(access_token=token)

@router.get("/me", response_model=UserOut)
def me(user = Depends(get_current_user)):
    return UserOut(id=user.id, login=user.login, full_name=user.full_name, role=user.role)
