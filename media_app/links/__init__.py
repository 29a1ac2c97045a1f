"""
Streaming link module.
In-memory link store plus pluggable link ID strategies.
"""

from .store import LinkStore, StreamingLink
from .link_id_strategies import LinkIdStrategy, UUIDLinkIdStrategy, TokenLinkIdStrategy
from .link_id_factory import LinkIdFactory, LinkIdStrategyType

__all__ = [
    "LinkStore",
    "StreamingLink",
    "LinkIdStrategy",
    "UUIDLinkIdStrategy",
    "TokenLinkIdStrategy",
    "LinkIdFactory",
    "LinkIdStrategyType",
]
