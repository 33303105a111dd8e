"""
Token Issuer

Generates opaque invitation tokens: 32 random bytes, URL-safe base64.
"""

import base64
import logging
import secrets
from typing import Awaitable, Callable

from organizations.domain.errors import TokenGenerationError

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32
MAX_TOKEN_ATTEMPTS = 5


class TokenIssuer:
    """
    Issues tokens that do not collide with any stored token.

    Business Rules:
    - Entropy comes from a cryptographically secure source (secrets)
    - A candidate already in the store is discarded and regenerated
    - Repeated collisions mean the random source is broken: fail hard
    """

    def __init__(
        self,
        random_source: Callable[[int], bytes] = secrets.token_bytes,
        token_bytes: int = TOKEN_BYTES,
        max_attempts: int = MAX_TOKEN_ATTEMPTS,
    ):
        if token_bytes < TOKEN_BYTES:
            raise ValueError(f"Tokens need at least {TOKEN_BYTES} bytes of entropy")
        self.random_source = random_source
        self.token_bytes = token_bytes
        self.max_attempts = max_attempts

    def generate(self) -> str:
        raw = self.random_source(self.token_bytes)
        return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")

    async def issue(self, is_taken: Callable[[str], Awaitable[bool]]) -> str:
        """
        Generate a token that ``is_taken`` reports as free.

        Args:
            is_taken: async predicate backed by the store's token index

        Raises:
            TokenGenerationError: every attempt collided
        """
        for attempt in range(1, self.max_attempts + 1):
            token = self.generate()
            if not await is_taken(token):
                return token
            logger.warning(f"Invitation token collision (attempt {attempt})")
        raise TokenGenerationError(
            f"Could not generate a unique token after {self.max_attempts} attempts"
        )
