import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from ..config import SECRET_KEY, TOKEN_EXPIRE_DAYS

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


def create_access_token(user_id: str) -> str:
    now = datetime.now(timezone.utc)
    to_encode = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + timedelta(days=TOKEN_EXPIRE_DAYS),
    }
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict | None:
    """Verify signature and expiry. Returns the claims, or None for any invalid token."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.info(f"Rejected access token: {e}")
        return None
    if not payload.get("sub"):
        return None
    return payload
