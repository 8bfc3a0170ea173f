# dumpmask/core/logging_layer.py
# Event log for engine operations.
#
# Scope: in-memory, event-sourced record of what each operation did (which
# file was masked, how many words were compared, ...). Every event carries a
# deterministic SHA-256 hash over its fields. No file IO. No global state.
#
# Canonical import:
#   from dumpmask.core.logging_layer import EventLogger, Event, EventFilter

# ===========================================================================
# SECTION 1 -- IMPORTS
# ===========================================================================

import hashlib
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterator, List, Optional

# ===========================================================================
# SECTION 2 -- CONSTANTS
# ===========================================================================

# Event types emitted by dumpmask.operations.
EVENT_VIEW_RENDERED: str     = "VIEW_RENDERED"
EVENT_MASK_APPLIED: str      = "MASK_APPLIED"
EVENT_COMPARE_COMPLETED: str = "COMPARE_COMPLETED"
EVENT_ERROR: str             = "ERROR"

# Field separator used inside the hash preimage.
_HASH_SEP: str = "|"

# ===========================================================================
# SECTION 3 -- DATACLASSES: Event, EventFilter
# ===========================================================================

@dataclass
class Event:
    """
    Record of a single engine event.

    Fields
    ------
    id        : Deterministic identifier derived from the logger's counter.
    type      : Category string (MASK_APPLIED, COMPARE_COMPLETED, ...).
    timestamp : Time reported by the logger's clock.
    data      : Key-value payload.
    hash      : SHA-256 hex digest over (id, type, timestamp, data).
    """
    id: str
    type: str
    timestamp: datetime
    data: Dict[str, Any]
    hash: str

    def format(self) -> str:
        """One-line text form used by the CLI --log-events flag."""
        items = " ".join("{}={}".format(k, v) for k, v in sorted(self.data.items()))
        return "{} {} {} {}".format(self.id, self.timestamp.isoformat(), self.type, items).rstrip()


@dataclass
class EventFilter:
    """
    Filter specification for EventLogger.query_events().

    All fields are optional. Omitted fields apply no constraint.
    """
    event_type: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    limit: Optional[int] = None


# ===========================================================================
# SECTION 4 -- INTERNAL HELPERS
# ===========================================================================

def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _compute_hash(
    event_id: str,
    event_type: str,
    timestamp: datetime,
    data: Dict[str, Any],
) -> str:
    """
    Compute a deterministic SHA-256 hex digest for an event.

    Preimage: id, type, timestamp.isoformat() and repr(sorted(data.items()))
    joined by _HASH_SEP. Insertion order of `data` does not matter.
    """
    sorted_items: str = repr(sorted(data.items()))
    preimage: str = (
        event_id
        + _HASH_SEP
        + event_type
        + _HASH_SEP
        + timestamp.isoformat()
        + _HASH_SEP
        + sorted_items
    )
    return hashlib.sha256(preimage.encode("ascii", errors="replace")).hexdigest()


def _make_event_id(counter: int) -> str:
    """Format: "EVT-{counter:016d}"."""
    return "EVT-{:016d}".format(counter)


# ===========================================================================
# SECTION 5 -- EventLogger
# ===========================================================================

class EventLogger:
    """
    Event-sourced logger with per-event integrity hashes.

    Events are held in an instance-level list. Each EventLogger is
    independent. The clock is injectable so tests get stable timestamps.

    log_event() raises LoggingError instead of silently discarding an
    event. Callers must handle or propagate it.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._store: List[Event] = []
        self._counter: int = 0
        self._clock: Callable[[], datetime] = clock if clock is not None else _utc_now

    def log_event(
        self,
        event_type: str,
        data: Dict[str, Any],
        timestamp: Optional[datetime] = None,
    ) -> str:
        """
        Record one event and return its ID.

        Parameters
        ----------
        event_type : Non-empty category string.
        data       : Key-value payload. Copied before storage.
        timestamp  : Optional explicit time; the logger's clock is used
                     when omitted.

        Raises
        ------
        LoggingError : If event_type is empty, data is not a dict, or the
                       timestamp is not a datetime.
        """
        if not event_type:
            raise LoggingError("event_type must be a non-empty string")
        if not isinstance(data, dict):
            raise LoggingError(
                "data must be a dict; got: {}".format(type(data).__name__)
            )
        if timestamp is None:
            timestamp = self._clock()
        if not isinstance(timestamp, datetime):
            raise LoggingError(
                "timestamp must be a datetime instance; got: {}".format(type(timestamp))
            )

        self._counter += 1
        event_id: str = _make_event_id(self._counter)
        payload: Dict[str, Any] = dict(data)
        event_hash: str = _compute_hash(event_id, event_type, timestamp, payload)

        self._store.append(Event(
            id=event_id,
            type=event_type,
            timestamp=timestamp,
            data=payload,
            hash=event_hash,
        ))
        return event_id

    def query_events(self, filter: EventFilter) -> List[Event]:
        """
        Return events matching `filter`, oldest first.

        Filtering order: event_type, start_time (inclusive), end_time
        (inclusive), then limit.
        """
        if filter is None:
            raise LoggingError("filter must not be None")

        results: List[Event] = []
        for event in self._store:
            if filter.event_type is not None and event.type != filter.event_type:
                continue
            if filter.start_time is not None and event.timestamp < filter.start_time:
                continue
            if filter.end_time is not None and event.timestamp > filter.end_time:
                continue
            results.append(event)

        if filter.limit is not None:
            results = results[: filter.limit]

        return results

    def get_event_stream(self) -> Iterator[Event]:
        """Yield all events in insertion order."""
        for event in self._store:
            yield event

    def verify(self) -> bool:
        """Return True iff every stored event still matches its hash."""
        for event in self._store:
            expected = _compute_hash(event.id, event.type, event.timestamp, event.data)
            if expected != event.hash:
                return False
        return True

    def event_count(self) -> int:
        return len(self._store)


# ===========================================================================
# SECTION 6 -- EXCEPTIONS
# ===========================================================================

class LoggingError(Exception):
    """
    Raised by EventLogger when an invariant is violated.

    Never silently swallowed.
    """
