"""
Token Registry - the set of access tokens allowed to open the location page
and submit coordinates.

Tokens are provisioned at startup from VALID_TOKENS and never change while
the process runs.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional
import logging

from locrelay.core.settings import settings

logger = logging.getLogger(__name__)


class TokenRegistry(ABC):
    """
    Read-only token lookup.

    Contract:
    - Exact, case-sensitive string comparison.
    - Anything that is not a non-empty string is invalid.
    """

    @abstractmethod
    def is_valid(self, token: Any) -> bool:
        raise NotImplementedError


class StaticTokenRegistry(TokenRegistry):
    """Registry backed by a fixed set of tokens."""

    def __init__(self, tokens: Iterable[str]):
        self._tokens = frozenset(t for t in tokens if isinstance(t, str) and t)

    def is_valid(self, token: Any) -> bool:
        if not isinstance(token, str) or not token:
            return False
        return token in self._tokens

    def __len__(self) -> int:
        return len(self._tokens)


# Global registry instance (singleton pattern)
_token_registry: Optional[TokenRegistry] = None


def get_token_registry() -> TokenRegistry:
    """
    Get or create the process-wide TokenRegistry.

    Returns:
        TokenRegistry: registry built from settings.VALID_TOKENS
    """
    global _token_registry
    if _token_registry is None:
        _token_registry = StaticTokenRegistry(settings.token_list())
        logger.info(f"Token registry initialized with {len(_token_registry)} token(s)")
    return _token_registry
