"""
Link ID generation strategies for streaming links.
Uses Strategy Pattern to allow different generation algorithms.
"""

import secrets
import uuid
from abc import ABC, abstractmethod


class LinkIdStrategy(ABC):
    """Abstract base class for streaming link ID strategies"""

    @abstractmethod
    def generate(self) -> str:
        """
        Generate an opaque, unguessable link ID.

        Uniqueness is probabilistic; the link store rejects the rare
        collision with a live link and asks for another ID.

        Returns:
            A URL-safe link ID string
        """
        pass


class UUIDLinkIdStrategy(LinkIdStrategy):
    """
    Random UUID (version 4) link IDs.

    Pros: Familiar format, 122 random bits
    Cons: Longer than needed, hyphens in URLs
    """

    def generate(self) -> str:
        return str(uuid.uuid4())


class TokenLinkIdStrategy(LinkIdStrategy):
    """
    URL-safe base64 tokens from the OS CSPRNG.

    Pros: Compact, configurable entropy
    Cons: Not human friendly
    """

    MIN_BYTES = 16  # Never go below 128 bits

    def __init__(self, num_bytes: int = 16):
        if num_bytes < self.MIN_BYTES:
            raise ValueError(
                f"Link tokens need at least {self.MIN_BYTES} random bytes, got {num_bytes}"
            )
        self.num_bytes = num_bytes

    def generate(self) -> str:
        return secrets.token_urlsafe(self.num_bytes)
