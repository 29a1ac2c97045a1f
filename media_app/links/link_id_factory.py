"""
Factory for creating link ID generation strategies.
Uses caching to avoid creating multiple instances.
"""

from enum import Enum
from media_app.links.link_id_strategies import (
    LinkIdStrategy,
    UUIDLinkIdStrategy,
    TokenLinkIdStrategy
)
from media_app.config import settings


class LinkIdStrategyType(Enum):
    """Available link ID generation strategies"""
    UUID4 = "uuid4"
    TOKEN = "token"


class LinkIdFactory:
    """Factory for creating link ID strategies with caching"""

    _instances = {}  # Cache for strategy instances

    @classmethod
    def create_strategy(
        cls,
        strategy_type: LinkIdStrategyType = None
    ) -> LinkIdStrategy:
        """
        Create or return cached link ID strategy.

        Args:
            strategy_type: Type of strategy to create.
                          If None, uses value from settings.

        Returns:
            A cached instance of a LinkIdStrategy

        Raises:
            ValueError: If strategy_type is unknown
        """
        if strategy_type is None:
            strategy_type = LinkIdStrategyType(settings.link_id_strategy)

        if strategy_type in cls._instances:
            return cls._instances[strategy_type]

        if strategy_type == LinkIdStrategyType.UUID4:
            instance = UUIDLinkIdStrategy()
        elif strategy_type == LinkIdStrategyType.TOKEN:
            instance = TokenLinkIdStrategy(num_bytes=settings.link_token_bytes)
        else:
            raise ValueError(f"Unknown strategy type: {strategy_type}")

        cls._instances[strategy_type] = instance
        return instance

    @classmethod
    def clear_instances(cls):
        """Clear cached instances (for testing)"""
        cls._instances = {}
