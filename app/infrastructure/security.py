"""Password hashing and bearer tokens for member logins."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import get_settings
from app.domain.entities import User

ALGORITHM = "HS256"

# pbkdf2 rounds trade login latency for brute-force cost.
pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=310_000,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Sign ``data`` with an ``exp`` claim using ``SECRET_KEY``."""

    settings = get_settings()
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims = dict(data, exp=datetime.now(timezone.utc) + lifetime)
    return jwt.encode(claims, settings.secret_key, algorithm=ALGORITHM)


def create_user_access_token(user: User) -> str:
    """Bearer token identifying ``user`` by email and carrying its role."""

    return create_access_token({"sub": user.email, "role": user.role})


def decode_access_token(token: str) -> dict:
    """Return the claims of ``token`` or raise ``ValueError``."""

    try:
        return jwt.decode(token, get_settings().secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc
