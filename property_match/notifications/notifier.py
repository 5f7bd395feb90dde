"""Best-effort notification delivery.

A record is already persisted by the time anyone is notified about it, so
a failed dispatch is logged and reported back, never raised.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Protocol

from property_match.models import Event
from property_match.models.listing import BuyerRequest, Property
from property_match.notifications import messages

logger = logging.getLogger(__name__)


class Dispatcher(Protocol):
    def dispatch(self, event: Event) -> None: ...

    def close(self) -> None: ...


@dataclass
class DispatchResult:
    """Outcome of one notification attempt."""

    event_type: str
    delivered: bool
    recipient: str | None = None
    error: str | None = None

    @property
    def warning(self) -> str | None:
        """Message for the caller when the notification did not go out."""
        if self.delivered:
            return None
        return f"Notification {self.event_type} was not sent: {self.error}"


class Notifier:
    """Wrap a dispatcher so failures never reach the write path."""

    def __init__(self, dispatcher: Dispatcher, admin_email: str) -> None:
        self.dispatcher = dispatcher
        self.admin_email = admin_email

    def notify(self, event: Event) -> DispatchResult:
        """Dispatch ``event``, catching and reporting any failure."""
        recipient = event.metadata.get("recipient")
        if not recipient:
            logger.warning(
                "Skipping %s for %s: no recipient",
                event.event_type,
                event.subject,
                extra=_context(event),
            )
            return DispatchResult(event.event_type, False, None, "no recipient email address")

        try:
            self.dispatcher.dispatch(event)
        except Exception as exc:  # noqa: BLE001 - any dispatcher failure is reported, not raised
            logger.warning(
                "Notification %s for %s failed: %s",
                event.event_type,
                event.subject,
                exc,
                exc_info=True,
                extra=_context(event),
            )
            return DispatchResult(event.event_type, False, recipient, str(exc))

        logger.info(
            "Sent %s for %s to %s",
            event.event_type,
            event.subject,
            recipient,
            extra=_context(event),
        )
        return DispatchResult(event.event_type, True, recipient)

    def property_submitted(self, prop: Property) -> DispatchResult:
        return self._build_and_notify(
            messages.PROPERTY_SUBMITTED,
            lambda: messages.property_submitted(prop, self.admin_email),
        )

    def buyer_request_submitted(self, request: BuyerRequest) -> DispatchResult:
        return self._build_and_notify(
            messages.BUYER_REQUEST_SUBMITTED,
            lambda: messages.buyer_request_submitted(request, self.admin_email),
        )

    def properties_matched(self, request: BuyerRequest, properties: list[Property]) -> DispatchResult:
        return self._build_and_notify(
            messages.BUYER_REQUEST_MATCHED,
            lambda: messages.properties_matched(request, properties),
        )

    def _build_and_notify(self, event_type: str, build: Callable[[], Event]) -> DispatchResult:
        """Render the event, then dispatch it; a record that cannot be rendered is reported too."""
        try:
            event = build()
        except Exception as exc:  # noqa: BLE001 - the record is already stored
            logger.warning(
                "Could not build %s notification: %s",
                event_type,
                exc,
                exc_info=True,
                extra={"event_type": event_type},
            )
            return DispatchResult(event_type, False, None, str(exc))
        return self.notify(event)

    def close(self) -> None:
        self.dispatcher.close()


def _context(event: Event) -> dict[str, str]:
    key = "property_id" if event.event_type == messages.PROPERTY_SUBMITTED else "request_id"
    return {"event_type": event.event_type, key: event.subject}
