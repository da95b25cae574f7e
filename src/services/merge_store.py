"""
Merged event set fed by independent full-snapshot sources.

Each source owns one partition. A snapshot from a source replaces only
that source's partition, so two feeds firing in any interleaving never
erase each other's latest contribution.
"""

import logging
import threading
from collections.abc import Callable, Hashable, Iterable
from typing import Generic, TypeVar

from core.config import ORIGINS
from models.events import Event

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class PartitionedSet(Generic[K, V]):
    """
    Map of partition key -> {member id: member}.

    replace() builds the new partition before taking the lock and swaps it
    in with a single assignment, so a reader sees either the old or the
    new partition, never neither. The version counts replacements and is
    bumped under the same lock as the swap.
    """

    def __init__(self, member_id: Callable[[V], Hashable]):
        self._member_id = member_id
        self._partitions: dict[K, dict[Hashable, V]] = {}
        self._version = 0
        self._lock = threading.Lock()

    def replace(self, key: K, members: Iterable[V]) -> None:
        partition = {self._member_id(member): member for member in members}
        with self._lock:
            self._partitions[key] = partition
            self._version += 1

    @property
    def version(self) -> int:
        with self._lock:
            return self._version

    def snapshot(self) -> tuple[int, list[V]]:
        """All members together with the version they belong to."""
        with self._lock:
            return self._version, [m for partition in self._partitions.values() for m in partition.values()]

    def members(self, key: K) -> list[V]:
        with self._lock:
            return list(self._partitions.get(key, {}).values())

    def all(self) -> list[V]:
        return self.snapshot()[1]

    def partitions(self) -> list[K]:
        with self._lock:
            return list(self._partitions)

    def clear(self) -> None:
        with self._lock:
            self._partitions = {}

    def __len__(self) -> int:
        with self._lock:
            return sum(len(partition) for partition in self._partitions.values())


class EventMergeStore:
    """Authoritative merged set of user events and project deadlines."""

    def __init__(self):
        self._events: PartitionedSet[str, Event] = PartitionedSet(lambda event: event.id)
        self._listeners: list[Callable[[list[Event]], None]] = []

    @property
    def version(self) -> int:
        """Number of partition replacements applied so far."""
        return self._events.version

    def replace_partition(self, origin: str, new_events: Iterable[Event]) -> None:
        """
        Replace every event tagged with origin by new_events.

        Raises:
            ValueError: unknown origin, or an event tagged with another origin
        """
        if origin not in ORIGINS:
            raise ValueError(f"Unknown event origin '{origin}'")

        new_events = list(new_events)
        for event in new_events:
            if event.origin != origin:
                raise ValueError(
                    f"Event '{event.id}' has origin '{event.origin}', expected '{origin}'"
                )

        self._events.replace(origin, new_events)

        logger.debug("Replaced %s partition with %d event(s)", origin, len(new_events))
        self._notify()

    def current_events(self) -> list[Event]:
        """Full merged set, in no particular order."""
        return self._events.all()

    def snapshot(self) -> tuple[int, list[Event]]:
        """Merged set and the version it was read at, taken together."""
        return self._events.snapshot()

    def partition(self, origin: str) -> list[Event]:
        return self._events.members(origin)

    def get(self, event_id: str) -> Event | None:
        for event in self._events.all():
            if event.id == event_id:
                return event
        return None

    def clear(self) -> None:
        self._events.clear()

    def add_listener(self, listener: Callable[[list[Event]], None]) -> None:
        """Call listener with the merged set after every replacement."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        if not self._listeners:
            return
        events = self.current_events()
        for listener in list(self._listeners):
            try:
                listener(events)
            except Exception:
                logger.exception("Merge store listener failed")

    def __len__(self) -> int:
        return len(self._events)
