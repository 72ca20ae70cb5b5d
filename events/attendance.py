# events/attendance.py
"""
Attendance processing for QR check-in.

A scan names an event (by its EVT-... code) and a person (by the SK ID on
their printed ID). Each (event, person) pair is recorded at most once and
earns points once: the full event reward for people who registered ahead,
half of it for walk-ins, who are registered on the spot.
"""
from dataclasses import dataclass, field
from typing import Optional
import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import Q

from gamification.engine import PointsEngine, reward_for_attendance
from gamification.models import PointsLedgerEntry
from .models import Event, EventAttendance, EventRegistration, ScanLog
from .state_machine import validate_action_for_status

logger = logging.getLogger('sk.events')

User = get_user_model()


@dataclass
class AttendanceOutcome:
    SUCCESS = "success"
    DUPLICATE = "duplicate"
    EVENT_NOT_FOUND = "event_not_found"
    PERSON_NOT_FOUND = "person_not_found"
    EVENT_CLOSED = "event_closed"

    kind: str
    message: str
    event_id: Optional[str] = None
    person_name: Optional[str] = None
    sk_id_number: Optional[str] = None
    was_pre_registered: Optional[bool] = None
    points_awarded: int = 0
    total_points: Optional[int] = None
    extra: dict = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.kind == self.SUCCESS

    @property
    def is_duplicate(self) -> bool:
        return self.kind == self.DUPLICATE

    @property
    def is_not_found(self) -> bool:
        return self.kind in (self.EVENT_NOT_FOUND, self.PERSON_NOT_FOUND)


class _AlreadyRecorded(Exception):
    """Raised inside the attendance transaction to roll it back as a duplicate."""


def _log_scan(action, event_code, person_code, event=None, person=None, scanned_by=None, ip_address=None):
    ScanLog.objects.create(
        event=event,
        person=person,
        scanned_by=scanned_by if getattr(scanned_by, "pk", None) else None,
        event_code=event_code[:64],
        person_code=person_code[:128],
        ip_address=ip_address,
        action=action,
    )


def mark_attendance(event_identifier: str, person_identifier: str, scanned_by=None, ip_address=None) -> AttendanceOutcome:
    """
    Record that the person holding `person_identifier` (SK ID) attended the
    event coded `event_identifier`.

    Preconditions are checked in order: event exists, person exists, person
    not already an attendee, event open for scanning. Expected failures are
    returned as outcomes, never raised, so a scanner can keep going.
    """
    event_code = (event_identifier or "").strip()
    person_code = (person_identifier or "").strip()

    event = Event.objects.filter(event_id=event_code).first()
    if event is None:
        _log_scan(ScanLog.ACTION_INVALID_EVENT, event_code, person_code,
                  scanned_by=scanned_by, ip_address=ip_address)
        return AttendanceOutcome(AttendanceOutcome.EVENT_NOT_FOUND, "Event not found", event_id=event_code)

    person = User.objects.filter(sk_id_number=person_code).first()
    if person is None:
        _log_scan(ScanLog.ACTION_INVALID_PERSON, event_code, person_code, event=event,
                  scanned_by=scanned_by, ip_address=ip_address)
        return AttendanceOutcome(
            AttendanceOutcome.PERSON_NOT_FOUND,
            "User not found with this SK ID",
            event_id=event.event_id,
            sk_id_number=person_code,
        )

    duplicate = AttendanceOutcome(
        AttendanceOutcome.DUPLICATE,
        "Attendance already recorded for this user",
        event_id=event.event_id,
        person_name=person.display_name,
        sk_id_number=person.sk_id_number,
    )

    # Checked again under the row lock below
    if EventAttendance.objects.filter(event=event, user=person).exists():
        _log_scan(ScanLog.ACTION_ALREADY_RECORDED, event_code, person_code, event=event, person=person,
                  scanned_by=scanned_by, ip_address=ip_address)
        return duplicate

    allowed, reason = validate_action_for_status(event, 'scan_attendance')
    if not allowed:
        _log_scan(ScanLog.ACTION_EVENT_CLOSED, event_code, person_code, event=event, person=person,
                  scanned_by=scanned_by, ip_address=ip_address)
        return AttendanceOutcome(
            AttendanceOutcome.EVENT_CLOSED,
            reason,
            event_id=event.event_id,
            person_name=person.display_name,
            sk_id_number=person.sk_id_number,
        )

    try:
        with transaction.atomic():
            # Serialize concurrent scans of the same event
            event = Event.objects.select_for_update().get(pk=event.pk)

            if EventAttendance.objects.filter(event=event, user=person).exists():
                raise _AlreadyRecorded()

            registration = EventRegistration.objects.filter(event=event, user=person).first()
            was_pre_registered = registration is not None
            points = reward_for_attendance(event.points_reward, was_pre_registered)

            if not was_pre_registered:
                EventRegistration.objects.create(event=event, user=person, is_walk_in=True)

            # Unique (event, user): a racing insert fails here and rolls everything back
            EventAttendance.objects.create(
                event=event,
                user=person,
                scanned_by=scanned_by if getattr(scanned_by, "pk", None) else None,
                was_pre_registered=was_pre_registered,
                points_awarded=points,
            )
            event.save(update_fields=["updated_at"])

            reason = (
                PointsLedgerEntry.REASON_EVENT_ATTENDED
                if was_pre_registered
                else PointsLedgerEntry.REASON_EVENT_WALK_IN
            )
            total = PointsEngine.credit(person, points, reason, event=event)
    except (_AlreadyRecorded, IntegrityError):
        _log_scan(ScanLog.ACTION_ALREADY_RECORDED, event_code, person_code, event=event, person=person,
                  scanned_by=scanned_by, ip_address=ip_address)
        logger.info(f"Duplicate attendance ignored: event={event.event_id}, person={person.sk_id_number}")
        return duplicate

    action = ScanLog.ACTION_CHECK_IN if was_pre_registered else ScanLog.ACTION_WALK_IN
    _log_scan(action, event_code, person_code, event=event, person=person,
              scanned_by=scanned_by, ip_address=ip_address)

    logger.info(
        f"Attendance recorded: event={event.event_id}, person={person.sk_id_number}, "
        f"pre_registered={was_pre_registered}, points={points}, total={total}"
    )

    message = "Attendance marked successfully"
    if not was_pre_registered:
        message += " (walk-in - half points)"

    return AttendanceOutcome(
        AttendanceOutcome.SUCCESS,
        message,
        event_id=event.event_id,
        person_name=person.display_name,
        sk_id_number=person.sk_id_number,
        was_pre_registered=was_pre_registered,
        points_awarded=points,
        total_points=total,
    )


def attendance_history(person) -> list:
    """
    Every event the person registered for or attended, newest first.
    """
    events = (
        Event.objects
        .filter(Q(registrations__user=person) | Q(attendances__user=person))
        .distinct()
        .order_by("-event_date")
    )

    registered_at = dict(
        EventRegistration.objects.filter(user=person).values_list("event", "registered_at")
    )
    attended_ids = set(
        EventAttendance.objects.filter(user=person).values_list("event", flat=True)
    )

    return [
        {
            "event_id": event.event_id,
            "title": event.title,
            "event_date": event.event_date,
            "location": event.location,
            "category": event.category,
            "points_reward": event.points_reward,
            "attended": event.pk in attended_ids,
            "registered_at": registered_at.get(event.pk),
        }
        for event in events
    ]
