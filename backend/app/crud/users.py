from sqlalchemy.orm import Session
from app.db.models.user import User
from app.core.security import hash_password
from app.schemas.auth import UserCreateIn

def get_user_by_login(db: Session, login: str) -> User | None:
    return db.query(User).filter(User.login == login.strip().lower()).one_or_none()

def get_active_user(db: Session, login: str) -> User | None:
    user = get_user_by_login(db, login)
    return user if user is not None and user.is_active else None

def create_user(db: Session, data: UserCreateIn) -> User:
    u = User(
        login=data.login.strip().lower(),
        password_hash=hash_password(data.password),
        role=data.role,
        full_name=data.full_name,
    )
    db.add(u)
    db.commit()
    db.refresh(u)
    return u
