"""
In-memory store for short-lived streaming links.

One instance is shared by every request in the process, so all access
goes through a single lock. Entries are immutable; a reader sees either a
whole link or nothing.
"""

import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

from loguru import logger

from media_app.errors import LinkExpiredError, MediaAppError, NotFoundError
from media_app.links.link_id_strategies import LinkIdStrategy, UUIDLinkIdStrategy


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class StreamingLink:
    """Binding of an opaque link ID to an asset's real location"""
    link_id: str
    asset_id: int
    target_location: str
    issued_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at


class LinkStore:
    """
    Keyed, TTL-bounded link store with passive sweeping.

    There is no background timer: expired links are dropped whenever a new
    link is issued, or individually when a redemption finds them expired.
    Memory stays bounded by roughly one TTL window of issued links.
    """

    def __init__(
        self,
        ttl: timedelta = timedelta(minutes=10),
        id_strategy: Optional[LinkIdStrategy] = None,
        clock: Callable[[], datetime] = utc_now,
        max_retries: int = 5,
    ):
        """
        Args:
            ttl: Fixed validity window applied to every issued link
            id_strategy: Link ID generator (random UUIDs by default)
            clock: Returns the current aware UTC time; injectable for tests
            max_retries: Attempts at drawing an ID not held by a live link
        """
        self.ttl = ttl
        self.id_strategy = id_strategy or UUIDLinkIdStrategy()
        self.clock = clock
        self.max_retries = max_retries
        self._links: Dict[str, StreamingLink] = {}
        self._lock = threading.Lock()

    def issue(self, asset_id: int, target_location: str) -> StreamingLink:
        """
        Mint a link for an asset and sweep expired entries.

        Insert and sweep run in one critical section: a single pass over
        the held links.
        """
        with self._lock:
            now = self.clock()
            removed = self._sweep_locked(now)

            for _ in range(self.max_retries):
                link_id = self.id_strategy.generate()
                if link_id not in self._links:
                    break
            else:
                raise MediaAppError(
                    f"Could not generate unique link ID after {self.max_retries} attempts"
                )

            link = StreamingLink(
                link_id=link_id,
                asset_id=asset_id,
                target_location=target_location,
                issued_at=now,
                expires_at=now + self.ttl,
            )
            self._links[link_id] = link
            held = len(self._links)

        if removed:
            logger.debug("Swept {} expired streaming links", removed)
        logger.info(
            "Issued streaming link for media {} (expires {}, {} held)",
            asset_id, link.expires_at.isoformat(), held,
        )
        return link

    def resolve(self, link_id: str, consume: bool = False) -> StreamingLink:
        """
        Look up a live link.

        Args:
            link_id: ID handed out by issue()
            consume: Remove the link on success (single-use redemption)

        Raises:
            NotFoundError: No such link is held
            LinkExpiredError: Link was held but its TTL elapsed; it is
                removed, so the next call raises NotFoundError
        """
        with self._lock:
            link = self._links.get(link_id)
            if link is None:
                raise NotFoundError("Streaming URL not found or expired")

            if link.is_expired(self.clock()):
                del self._links[link_id]
                expired = True
            else:
                expired = False
                if consume:
                    del self._links[link_id]

        if expired:
            logger.info("Streaming link for media {} expired", link.asset_id)
            raise LinkExpiredError()
        return link

    def sweep(self) -> int:
        """Drop every expired link. Returns the number removed."""
        with self._lock:
            return self._sweep_locked(self.clock())

    def _sweep_locked(self, now: datetime) -> int:
        expired = [
            link_id for link_id, link in self._links.items()
            if link.is_expired(now)
        ]
        for link_id in expired:
            del self._links[link_id]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._links)

    def __contains__(self, link_id: str) -> bool:
        with self._lock:
            return link_id in self._links
