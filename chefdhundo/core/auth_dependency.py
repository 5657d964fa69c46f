from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session
from chefdhundo.core.security import decode_access_token
from chefdhundo.db.session import SessionLocal
from chefdhundo.db.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


def get_db():
    """Database session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _decode_claims(credentials: HTTPAuthorizationCredentials) -> dict:
    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid token")

    if payload.get("sub") is None:
        raise HTTPException(status_code=401, detail="Invalid token")
    return payload


def get_current_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> dict:
    """Claims of the bearer token; ``sub`` is the external identity id."""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Unauthorized - Please sign in")
    return _decode_claims(credentials)


def get_current_user_obj(
    claims: dict = Depends(get_current_claims),
    db: Session = Depends(get_db)
) -> User:
    """Get current User object from the bearer token."""
    user = db.query(User).filter(User.external_id == claims["sub"]).first()
    if not user:
        raise HTTPException(
            status_code=404,
            detail="User not found"
        )
    return user


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> Optional[User]:
    """Current user when a token is sent, None for anonymous requests."""
    if credentials is None:
        return None
    claims = _decode_claims(credentials)
    return db.query(User).filter(User.external_id == claims["sub"]).first()


def require_admin(user: User = Depends(get_current_user_obj)) -> User:
    if user.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: Admin access required"
        )
    return user
