import datetime
from hmac import compare_digest
from typing import Any, Dict, Optional

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from faq_assistant.config import Config

SECRET_KEY = Config.SECRET_KEY
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60


def hash_password(password: str) -> str:
    """Hash a password for storage."""
    return generate_password_hash(str(password or ""))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify plain input against hashed/legacy plain-text stored values."""
    plain = str(plain_password or "")
    stored = str(hashed_password or "")
    if not plain or not stored:
        return False

    if stored.startswith(("pbkdf2:", "scrypt:")):
        try:
            return check_password_hash(stored, plain)
        except ValueError:
            return False

    # Legacy plain-text support.
    return compare_digest(plain.encode("utf-8"), stored.encode("utf-8"))


def create_access_token(
    data: Dict[str, Any], expires_delta: Optional[datetime.timedelta] = None
) -> str:
    """Create a new JWT access token."""
    to_encode = data.copy()
    expire = datetime.datetime.now(datetime.timezone.utc) + (
        expires_delta or datetime.timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode and verify a JWT token."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        return payload
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None
