"""Round events - the audit trail of every draw and settlement."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum, auto
from typing import Any, Callable


class EventType(Enum):
    """Types of round events."""

    # Round flow events
    ROUND_STARTED = auto()
    ROUND_ENDED = auto()

    # Wallet events
    STAKE_DEBITED = auto()
    PAYOUT_CREDITED = auto()

    # Randomness events
    CARD_DEALT = auto()
    WHEEL_SPUN = auto()

    # Player action events
    PLAYER_HIT = auto()
    PLAYER_STAND = auto()
    PLAYER_DOUBLE = auto()
    PLAYER_BUSTS = auto()
    CARDS_HELD = auto()

    # Dealer events
    DEALER_REVEALS = auto()
    DEALER_HITS = auto()
    DEALER_STANDS = auto()
    DEALER_BUSTS = auto()

    # Outcome events
    NATURAL = auto()
    THIRD_CARD = auto()
    BET_RESOLVED = auto()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class GameEvent:
    """
    Immutable audit record.

    `sequence` is the event's position in its round, starting at 0, so a
    log can be checked for gaps or reordering after the fact.
    """

    event_type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    sequence: int = 0
    timestamp: datetime = field(default_factory=_utcnow)

    def to_dict(self) -> dict[str, Any]:
        """Flatten to a JSON-friendly record."""
        return {
            "sequence": self.sequence,
            "type": self.event_type.name.lower(),
            "timestamp": self.timestamp.isoformat(),
            "data": dict(self.data),
        }

    def __str__(self) -> str:
        return f"#{self.sequence} {self.event_type.name}: {self.data}"


# Type alias for event handlers
EventHandler = Callable[[GameEvent], None]


class EventEmitter:
    """
    Records a round's events in order and fans them out to subscribers.

    Handlers may subscribe to one event type or, with None, to everything.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType | None, list[EventHandler]] = {}
        self._log: list[GameEvent] = []

    def subscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """
        Subscribe to events.

        Args:
            handler: Function to call when event occurs
            event_type: Specific event type to subscribe to, or None for all events
        """
        self._handlers.setdefault(event_type, []).append(handler)

    def unsubscribe(
        self,
        handler: EventHandler,
        event_type: EventType | None = None,
    ) -> None:
        """Unsubscribe a handler; unknown handlers are ignored."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: GameEvent) -> None:
        """Record an event and call its subscribers."""
        self._log.append(event)

        for handler in self._handlers.get(event.event_type, []):
            handler(event)
        for handler in self._handlers.get(None, []):
            handler(event)

    def emit_new(self, event_type: EventType, **data: Any) -> GameEvent:
        """Create the next event in sequence and emit it."""
        event = GameEvent(event_type=event_type, data=data, sequence=len(self._log))
        self.emit(event)
        return event

    @property
    def history(self) -> list[GameEvent]:
        """Return a copy of the recorded events, oldest first."""
        return list(self._log)

    def of_type(self, event_type: EventType) -> list[GameEvent]:
        """Return recorded events of one type, oldest first."""
        return [e for e in self._log if e.event_type == event_type]

    def records(self) -> list[dict[str, Any]]:
        """Return the whole log as plain dicts."""
        return [e.to_dict() for e in self._log]
