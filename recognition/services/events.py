"""
Post-commit hooks.

Services publish an ``Event`` once their primary write has committed.
Handlers (audit, notifications) run one after another; a failing handler is
logged and skipped so it can never change the outcome of the write that
triggered it.
"""

# Standard library imports
from collections import defaultdict
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
import enum
from typing import Any

# Local application imports
from recognition.core.monitoring.logging import get_contextual_logger
from recognition.core.monitoring.sentry import capture_exception
from recognition.models.audit.audit_log import AuditAction, AuditEntity
from recognition.schemas.audit.audit_schemas import Actor, AuditChange
from recognition.services.audit.audit_services import AuditSink
from recognition.services.notifications.notification_services import (
    Notification,
    Notifier,
    nomination_confirmation_message,
    voting_closed_message,
    voting_open_message,
    winner_announcement_message,
)

logger = get_contextual_logger(__name__)


class EventType(str, enum.Enum):
    PERIOD_CREATED = "period_created"
    PERIOD_UPDATED = "period_updated"
    PERIOD_CLOSED = "period_closed"
    PERIOD_RESET = "period_reset"
    PERIOD_DELETED = "period_deleted"
    NOMINATION_CREATED = "nomination_created"
    WINNERS_RECORDED = "winners_recorded"
    CONFIGURATION_UPDATED = "configuration_updated"


@dataclass(frozen=True)
class Event:
    type: EventType
    entity_id: str
    actor: Actor
    changes: tuple[AuditChange, ...] = ()
    payload: Mapping[str, Any] = field(default_factory=dict)


EventHandler = Callable[[Event], Awaitable[None]]


class PostCommitHooks:
    def __init__(self) -> None:
        self._handlers: defaultdict[EventType, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: EventType, handler: EventHandler) -> None:
        self._handlers[event_type].append(handler)

    def handlers_for(self, event_type: EventType) -> list[EventHandler]:
        return list(self._handlers[event_type])

    async def publish(self, event: Event) -> None:
        for handler in self.handlers_for(event.type):
            try:
                await handler(event)
            except Exception as e:
                logger.bind(event=event.type.value, entity_id=event.entity_id).error(
                    f"Post-commit handler {type(handler).__name__} failed: {e}", exc_info=True
                )
                capture_exception(e)


AUDITED_EVENTS: dict[EventType, tuple[AuditEntity, AuditAction]] = {
    EventType.PERIOD_CREATED: (AuditEntity.VOTING_PERIOD, AuditAction.CREATE),
    EventType.PERIOD_UPDATED: (AuditEntity.VOTING_PERIOD, AuditAction.UPDATE),
    EventType.PERIOD_CLOSED: (AuditEntity.VOTING_PERIOD, AuditAction.CLOSE),
    EventType.PERIOD_RESET: (AuditEntity.VOTING_PERIOD, AuditAction.RESET),
    EventType.PERIOD_DELETED: (AuditEntity.VOTING_PERIOD, AuditAction.DELETE),
    EventType.NOMINATION_CREATED: (AuditEntity.NOMINATION, AuditAction.CREATE),
    EventType.WINNERS_RECORDED: (AuditEntity.WINNER, AuditAction.CREATE),
    EventType.CONFIGURATION_UPDATED: (AuditEntity.CONFIGURATION, AuditAction.UPDATE),
}


class AuditHandler:
    def __init__(self, sink: AuditSink) -> None:
        self.sink = sink

    def register(self, hooks: PostCommitHooks) -> None:
        for event_type in AUDITED_EVENTS:
            hooks.subscribe(event_type, self)

    async def __call__(self, event: Event) -> None:
        entity_type, action = AUDITED_EVENTS[event.type]
        await self.sink.record(
            entity_type=entity_type,
            entity_id=event.entity_id,
            action=action,
            actor=event.actor,
            changes=event.changes,
            metadata=event.payload,
        )


class NotificationHandler:
    """Turns lifecycle events into announcements."""

    def __init__(self, notifier: Notifier, broadcast_address: str) -> None:
        self.notifier = notifier
        self.broadcast_address = broadcast_address

    def register(self, hooks: PostCommitHooks) -> None:
        for event_type in (
            EventType.PERIOD_CREATED,
            EventType.PERIOD_CLOSED,
            EventType.NOMINATION_CREATED,
            EventType.WINNERS_RECORDED,
        ):
            hooks.subscribe(event_type, self)

    def build_message(self, event: Event) -> Notification | None:
        payload = event.payload
        if event.type == EventType.PERIOD_CREATED:
            if payload.get("status") != "active":
                return None
            return voting_open_message(payload["year"], payload["month"], payload["end_date"], self.broadcast_address)

        if event.type == EventType.PERIOD_CLOSED:
            return voting_closed_message(payload["year"], payload["month"], self.broadcast_address)

        if event.type == EventType.NOMINATION_CREATED:
            return nomination_confirmation_message(
                payload["year"],
                payload["month"],
                payload["nominee_name"],
                payload["nominee_department"],
                payload["reason"],
                recipient=payload["nominator_email"],
            )

        if event.type == EventType.WINNERS_RECORDED:
            winner = payload.get("general_winner")
            if not winner:
                return None
            return winner_announcement_message(
                payload["year"],
                payload["month"],
                winner["employee_name"],
                winner["department"],
                winner["position"],
                winner["nomination_count"],
                winner["percentage"],
                recipient=self.broadcast_address,
            )

        return None

    async def __call__(self, event: Event) -> None:
        message = self.build_message(event)
        if message is None:
            return
        await self.notifier.notify(message.to, message.subject, message.body)


def build_post_commit_hooks(
    audit_sink: AuditSink | None = None,
    notifier: Notifier | None = None,
    broadcast_address: str = "",
) -> PostCommitHooks:
    hooks = PostCommitHooks()
    if audit_sink is not None:
        AuditHandler(audit_sink).register(hooks)
    if notifier is not None:
        NotificationHandler(notifier, broadcast_address).register(hooks)
    return hooks
