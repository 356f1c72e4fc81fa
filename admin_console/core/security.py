# admin_console/core/security.py
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from admin_console.core.config import settings
from admin_console.core.errors import InvalidToken, TokenExpired, WrongSubjectType

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
ALGORITHM = settings.JWT_ALGORITHM
SECRET_KEY = settings.JWT_SECRET
ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES

SUBJECT_ADMIN = "admin"
SUBJECT_OFFICE = "office"
SUBJECT_TYPES = (SUBJECT_ADMIN, SUBJECT_OFFICE)


@dataclass(frozen=True)
class TokenClaims:
    subject_id: str
    subject_type: str


def hash_password(plain_password: str) -> str:
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # stored value is not a recognised hash
        return False


def create_access_token(subject: str, subject_type: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT with 'sub' (record id) and 'type' (admin | office) in the payload.
    """
    if subject_type not in SUBJECT_TYPES:
        raise ValueError(f"Unknown subject type: {subject_type}")
    now = datetime.now()
    if expires_delta is None:
        expires_delta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = now + expires_delta
    to_encode: Dict[str, Any] = {
        "sub": subject,
        "type": subject_type,
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    token = jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)
    return token


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode JWT and return payload. Raises jose.JWTError on invalid token.
    """
    payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    return payload


def verify_access_token(token: str, allowed_types: Iterable[str] = SUBJECT_TYPES) -> TokenClaims:
    """
    Verify signature and expiry, then check the subject type discriminator.
    Each failure raises its own AuthenticationError subclass.
    """
    allowed = tuple(allowed_types)
    try:
        payload = decode_access_token(token)
    except ExpiredSignatureError:
        raise TokenExpired()
    except JWTError:
        raise InvalidToken()

    subject_id = payload.get("sub")
    subject_type = payload.get("type")
    if not subject_id or subject_type not in SUBJECT_TYPES:
        raise InvalidToken("Invalid token payload.")
    if subject_type not in allowed:
        raise WrongSubjectType(f"Invalid token type for {'/'.join(allowed)} access.")
    return TokenClaims(subject_id=str(subject_id), subject_type=subject_type)
