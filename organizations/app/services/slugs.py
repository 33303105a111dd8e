"""
Slug Generation

Turns organization names into URL slugs that are unique across the store.
"""

import re
import secrets
import unicodedata
from typing import Awaitable, Callable

from organizations.domain.entities.organization import SLUG_INDEX
from organizations.domain.errors import UniqueViolation

MAX_SLUG_LENGTH = 255
MAX_SLUG_ATTEMPTS = 10
FALLBACK_SLUG = "organization"


def slugify(name: str) -> str:
    """
    Lowercase ASCII slug: "Acme Corp!" -> "acme-corp"
    """
    normalized = unicodedata.normalize("NFKD", name or "")
    ascii_name = normalized.encode("ascii", "ignore").decode("ascii").lower()
    slug = re.sub(r"[^a-z0-9]+", "-", ascii_name).strip("-")
    return slug[:MAX_SLUG_LENGTH] or FALLBACK_SLUG


class SlugGenerator:
    """Base slug plus a random suffix when the base is taken"""

    def __init__(self, max_attempts: int = MAX_SLUG_ATTEMPTS):
        self.max_attempts = max_attempts

    async def generate(
        self, name: str, is_taken: Callable[[str], Awaitable[bool]]
    ) -> str:
        base = slugify(name)
        candidate = base
        for _ in range(self.max_attempts):
            if not await is_taken(candidate):
                return candidate
            suffix = secrets.token_hex(3)
            candidate = f"{base[: MAX_SLUG_LENGTH - len(suffix) - 1]}-{suffix}"
        raise UniqueViolation(SLUG_INDEX, f"Could not generate a unique slug for {name!r}")
