"""Outbound notifications for submissions and buyer matches."""

from property_match.config import AppConfig
from property_match.notifications.console import ConsoleDispatcher, NullDispatcher
from property_match.notifications.notifier import Dispatcher, DispatchResult, Notifier


def build_notifier(config: AppConfig) -> Notifier:
    """Create a Notifier with the dispatcher selected by ``config.notifications.backend``."""
    backend = config.notifications.backend
    dispatcher: Dispatcher
    if backend == "kafka":
        from property_match.notifications.kafka import KafkaDispatcher

        dispatcher = KafkaDispatcher(config.kafka)
    elif backend == "console":
        dispatcher = ConsoleDispatcher(sender=config.notifications.sender)
    else:
        dispatcher = NullDispatcher()
    return Notifier(dispatcher, admin_email=config.notifications.admin_email)


__all__ = [
    "ConsoleDispatcher",
    "DispatchResult",
    "Dispatcher",
    "Notifier",
    "NullDispatcher",
    "build_notifier",
]
