"""
HMAC-signed JWT verification.

Tokens carry the user's id in "sub". create_token exists for tests and
local tooling; production tokens come from the identity provider that
shares JWT_SECRET.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Any

from jose import jwt, JWTError

from common.auth.base import AuthProvider


class JWTAuth(AuthProvider):
    """python-jose backed AuthProvider."""

    def __init__(self, secret: str, algorithm: str = "HS256", token_lifetime_minutes: int = 60):
        self.secret = secret
        self.algorithm = algorithm
        self.token_lifetime = timedelta(minutes=token_lifetime_minutes)

    async def create_token(self, user_id: str, **claims: Any) -> str:
        issued_at = datetime.now(timezone.utc)
        payload = {
            **claims,
            "sub": user_id,
            "iat": issued_at,
            "exp": issued_at + self.token_lifetime,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    async def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Decode a token, checking signature and expiry.

        Raises:
            ValueError: Bad signature, expired or malformed token
        """
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise ValueError(f"Invalid token: {e}") from e
