import logging
from datetime import datetime, timedelta
from typing import Optional

from jose import jwt, JWTError

from chefdhundo.core.config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES

logger = logging.getLogger(__name__)

STORAGE_TOKEN_SCOPE = "storage:read"


def create_access_token(data: dict, expires_delta: timedelta = None):
    """
    Issue a bearer token.

    The identity provider issues these in production; the API only needs to
    mint them for tests and for local development. ``sub`` carries the
    external identity id.
    """
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Decode and validate a bearer token. Raises JWTError when invalid or expired."""
    return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])


def create_storage_token(bucket: str, path: str, expires_in: int) -> str:
    """
    Create a capability token for one stored object.

    Args:
        bucket: Storage bucket name
        path: Object key inside the bucket
        expires_in: Lifetime in seconds
    """
    expire = datetime.utcnow() + timedelta(seconds=expires_in)
    claims = {
        "scope": STORAGE_TOKEN_SCOPE,
        "bucket": bucket,
        "path": path,
        "exp": expire,
    }
    return jwt.encode(claims, SECRET_KEY, algorithm=ALGORITHM)


def verify_storage_token(token: Optional[str], bucket: str, path: str) -> bool:
    """Check that a storage token is valid, unexpired, and issued for this object."""
    if not token:
        return False
    try:
        claims = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.debug(f"Storage token rejected: {e}")
        return False

    return (
        claims.get("scope") == STORAGE_TOKEN_SCOPE
        and claims.get("bucket") == bucket
        and claims.get("path") == path
    )
