# gymdesk/adapters/outbound/security/auth_user_manager.py (async version)

from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from jose import jwt, JWTError
from fastapi import HTTPException, status
from passlib.context import CryptContext

from gymdesk.adapters.configuration.config import settings

SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.ALGORITHM
DEFAULT_EXPIRES_MIN = settings.ACCESS_TOKEN_EXPIRE_MINUTES


class UserAuthManager:
    """
    JWT authentication manager for gym staff users.

    Access tokens carry the username (``sub``) and the gym the user works for
    (``gym_id``); the tenant of every authenticated request comes from there.
    """

    crypt_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

    @classmethod
    async def hash_password(cls, password: str) -> str:
        """Return the hash of a plain text password."""
        return cls.crypt_context.hash(password)

    @classmethod
    async def verify_password(cls, plain_password: str, hashed_password: str) -> bool:
        """Verify if the plain text password matches the stored hash."""
        return cls.crypt_context.verify(plain_password, hashed_password)

    @classmethod
    async def create_access_token(
            cls, subject: str, gym_id: int, expires_delta: Optional[timedelta] = None
    ) -> Tuple[str, datetime]:
        """
        Create a JWT access token for the authenticated user.

        - subject: the user's username.
        - gym_id: tenant the token is scoped to.
        - expires_delta: custom expiration time.

        Returns the encoded token and its expiry instant (UTC).
        """
        if expires_delta is None:
            expires_delta = timedelta(minutes=DEFAULT_EXPIRES_MIN)

        expire = datetime.now(timezone.utc) + expires_delta

        payload = {
            "sub": str(subject),
            "gym_id": int(gym_id),
            "exp": int(expire.timestamp()),
            "type": "user",
        }
        return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM), expire

    @classmethod
    async def verify_access_token(cls, token: str) -> dict:
        """
        Verify and decode a JWT access token.
        The token must be a user token with a subject and a positive gym id.
        """
        try:
            payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        except JWTError:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid or expired token."
            )

        if payload.get("type") != "user" or not payload.get("sub"):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token: incorrect type."
            )

        gym_id = payload.get("gym_id")
        if not isinstance(gym_id, int) or isinstance(gym_id, bool) or gym_id <= 0:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token: missing gym."
            )

        return payload
