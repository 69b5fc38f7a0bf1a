"""
Authentication service for the shared API token.

There are no user accounts: a request is authenticated when it presents
the single token configured in ``Settings.api_token``.
"""

import hmac
import structlog
from typing import Optional

from lessons_api.config import Settings

logger = structlog.get_logger(__name__)


class AuthService:
    """Checks bearer tokens against the configured API token."""

    def __init__(self, settings: Settings):
        """
        Initialize auth service.

        Args:
            settings: Application settings holding the expected token
        """
        self.settings = settings

    def verify_token(self, token: Optional[str]) -> bool:
        """
        Check a presented token.

        Args:
            token: Token from the Authorization header, if any

        Returns:
            True if the token matches the configured API token
        """
        if not token:
            return False

        valid = hmac.compare_digest(
            token.encode("utf-8"),
            self.settings.api_token.encode("utf-8")
        )
        if not valid:
            logger.warning("token_mismatch")
        return valid

    @staticmethod
    def token_hint(token: str) -> str:
        """Masked form of a token that is safe to echo back or log."""
        return f"...{token[-4:]}"
