"""Abstract interface for issuing and verifying bearer tokens."""

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Any


class TokenIssuer(ABC):
    """Port for signed bearer tokens: implemented with PyJWT in infrastructure."""

    @abstractmethod
    def issue(self, claims: dict[str, Any], expires_in: timedelta) -> str:
        """Sign ``claims`` into a token that expires after ``expires_in``."""
        ...

    @abstractmethod
    def decode(self, token: str) -> dict[str, Any]:
        """Verify a token and return its claims.

        Raises AuthenticationError (code ``INVALID_TOKEN``) when the token is
        malformed, tampered with or expired.
        """
        ...
