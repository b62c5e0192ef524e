"""
Token verification interface.

Routers only need the user id a token vouches for; anything that can
turn a bearer token into claims with a "sub" can back the API.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any


class AuthProvider(ABC):
    """Verifies bearer tokens."""

    @abstractmethod
    async def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Decode and check a token.

        Returns:
            Token claims, including "sub" (the user id)

        Raises:
            ValueError: Token is invalid or expired
        """
