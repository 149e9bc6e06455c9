from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.core.logging import logger
from app.core.permissions import is_allowed
from app.core.security import TokenError, decode_token
from app.db.models.user import User
from app.crud.users import get_active_user
from app.services.events.bus import EventBus
from app.services.events.publisher import EventPublisher

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_current_user(db: Session = Depends(get_db), token: str = Depends(oauth2_scheme)) -> User:
    try:
        payload = decode_token(token)
    except TokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    user = get_active_user(db, payload["sub"])
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found/disabled")
    return user

def require_permission(action: str):
    def _dep(user: User = Depends(get_current_user)) -> User:
        if not is_allowed(action, user.role):
            logger.info("permission_denied", action=action, user_id=user.id, role=user.role)
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="You do not have permissions to perform this action")
        return user
    return _dep

def get_publisher(request: Request) -> EventPublisher:
    return request.app.state.publisher

def get_event_bus(request: Request) -> EventBus:
    return request.app.state.event_bus
