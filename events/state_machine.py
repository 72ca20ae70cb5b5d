# events/state_machine.py
"""
Event State Machine for the youth registry.

Enforces valid state transitions for the event lifecycle:
Draft → Published → Cancelled
                  └→ Completed

Cancelled and Completed are terminal. Any transition not in
VALID_TRANSITIONS is rejected.
"""
from typing import Tuple
import logging

from .models import Event

logger = logging.getLogger('sk.events')


# Valid state transitions: from_status -> list of allowed to_statuses
VALID_TRANSITIONS = {
    Event.STATUS_DRAFT: [Event.STATUS_PUBLISHED],
    Event.STATUS_PUBLISHED: [Event.STATUS_CANCELLED, Event.STATUS_COMPLETED],
    Event.STATUS_CANCELLED: [],
    Event.STATUS_COMPLETED: [],
}

# Completed events still accept late scans of people who were present
SCANNABLE_STATUSES = (Event.STATUS_PUBLISHED, Event.STATUS_COMPLETED)


def can_transition(event: Event, new_status: str) -> Tuple[bool, str]:
    """
    Check if an event can transition to a new status.

    Returns (can_transition: bool, reason: str)
    """
    current_status = event.status

    if new_status == current_status:
        return True, "Same status"

    if new_status not in dict(Event.STATUS_CHOICES):
        return False, f"Invalid status: {new_status}"

    allowed = VALID_TRANSITIONS.get(current_status, [])

    if new_status not in allowed:
        return False, f"Cannot transition from '{current_status}' to '{new_status}'"

    return True, ""


def transition(event: Event, new_status: str, actor=None, save: bool = True) -> Tuple[bool, str]:
    """
    Attempt to transition an event to a new status.

    Args:
        event: The event to transition
        new_status: The target status
        actor: The user performing the action (for logging)
        save: Whether to save the event after transitioning

    Returns (success: bool, message: str)
    """
    can, reason = can_transition(event, new_status)

    if not can:
        logger.warning(
            f"Invalid state transition attempted: event={event.event_id}, "
            f"from={event.status}, to={new_status}, actor={getattr(actor, 'id', 'unknown')}. "
            f"Reason: {reason}"
        )
        return False, reason

    old_status = event.status
    if old_status == new_status:
        return True, reason

    event.status = new_status

    if save:
        event.save(update_fields=['status', 'updated_at'])

    logger.info(
        f"Event state transition: event={event.event_id}, "
        f"from={old_status}, to={new_status}, actor={getattr(actor, 'id', 'unknown')}"
    )

    return True, f"Transitioned from '{old_status}' to '{new_status}'"


def get_allowed_transitions(event: Event) -> list:
    """
    Get list of allowed status transitions for an event.
    """
    return VALID_TRANSITIONS.get(event.status, [])


def is_terminal_status(status: str) -> bool:
    return status in VALID_TRANSITIONS and len(VALID_TRANSITIONS[status]) == 0


def validate_action_for_status(event: Event, action: str) -> Tuple[bool, str]:
    """
    Validate if an action is allowed given the event's current status.

    Actions and their requirements:
    - 'register' / 'unregister': Event must be Published
    - 'scan_attendance': Event must be Published or Completed
    - 'edit': Event must not be in a terminal state
    """
    status = event.status

    if action in ('register', 'unregister'):
        if status != Event.STATUS_PUBLISHED:
            return False, "Event not available for registration"
        return True, ""

    elif action == 'scan_attendance':
        if status not in SCANNABLE_STATUSES:
            return False, f"Attendance cannot be recorded for a {status.lower()} event"
        return True, ""

    elif action == 'edit':
        if is_terminal_status(status):
            return False, f"A {status.lower()} event can no longer be edited"
        return True, ""

    return True, ""  # Unknown actions are allowed by default
