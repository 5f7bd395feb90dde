"""Console dispatcher for development: prints notifications instead of sending them."""

import json

from property_match.models import Event
from property_match.notifications.serialization import to_dict


class ConsoleDispatcher:
    """Print notification events to stdout."""

    def __init__(self, pretty: bool = True, sender: str | None = None) -> None:
        """Initialize console dispatcher.

        Parameters
        ----------
        pretty : bool
            Pretty-print JSON output.
        sender : str | None
            From address shown with each message.
        """
        self.pretty = pretty
        self.sender = sender
        self._counts: dict[str, int] = {}

    def dispatch(self, event: Event) -> None:
        """Print one notification."""
        print(f"\n{'='*60}")
        print(f"Notification: {event.event_type}")
        print(f"To: {event.metadata.get('recipient')}")
        if self.sender:
            print(f"From: {self.sender}")
        print(f"Subject: {event.metadata.get('title')}")
        print("=" * 60)

        data = to_dict(event)
        if self.pretty:
            print(json.dumps(data, indent=2, ensure_ascii=False, default=str))
        else:
            print(json.dumps(data, ensure_ascii=False, default=str))

        self._counts[event.event_type] = self._counts.get(event.event_type, 0) + 1

    def close(self) -> None:
        """Print summary and close."""
        print(f"\n{'='*60}")
        print("Console Dispatcher Summary")
        print("=" * 60)
        for event_type, count in self._counts.items():
            print(f"  {event_type}: {count} notifications")


class NullDispatcher:
    """Discard notifications (notifications disabled)."""

    def dispatch(self, event: Event) -> None:
        pass

    def close(self) -> None:
        pass
