from unittest import mock

from django.db import IntegrityError
from django.test import TestCase

from events.attendance import AttendanceOutcome, attendance_history, mark_attendance
from events.models import Event, EventAttendance, EventRegistration, ScanLog
from gamification.models import PointsLedgerEntry
from .factories import make_admin, make_event, make_youth


class MarkAttendanceTestCase(TestCase):
    def setUp(self):
        self.admin = make_admin()
        self.event = make_event(points_reward=10)
        self.p1 = make_youth("p1", "Ana", "Cruz")
        self.p2 = make_youth("p2", "Ben", "Reyes")
        EventRegistration.objects.create(event=self.event, user=self.p1)

    def scan(self, person, event=None):
        event = event or self.event
        return mark_attendance(event.event_id, person.sk_id_number, scanned_by=self.admin, ip_address="10.0.0.5")

    def test_pre_registered_and_walk_in_scenario(self):
        first = self.scan(self.p1)
        self.assertTrue(first.ok)
        self.assertTrue(first.was_pre_registered)
        self.assertEqual(first.points_awarded, 10)
        self.assertEqual(first.total_points, 10)
        self.assertEqual(first.message, "Attendance marked successfully")

        second = self.scan(self.p2)
        self.assertTrue(second.ok)
        self.assertFalse(second.was_pre_registered)
        self.assertEqual(second.points_awarded, 5)
        self.assertIn("walk-in", second.message)

        self.assertTrue(self.event.registered.filter(pk=self.p2.pk).exists())
        self.assertTrue(self.event.attendees.filter(pk=self.p2.pk).exists())
        self.assertTrue(EventRegistration.objects.get(event=self.event, user=self.p2).is_walk_in)

        self.assertEqual(self.scan(self.p1).kind, AttendanceOutcome.DUPLICATE)
        self.assertEqual(self.scan(self.p2).kind, AttendanceOutcome.DUPLICATE)

    def test_duplicate_scan_awards_points_once(self):
        self.scan(self.p1)
        outcome = self.scan(self.p1)

        self.assertTrue(outcome.is_duplicate)
        self.assertEqual(outcome.points_awarded, 0)
        self.p1.refresh_from_db()
        self.assertEqual(self.p1.points, 10)
        self.assertEqual(EventAttendance.objects.filter(event=self.event, user=self.p1).count(), 1)
        self.assertEqual(PointsLedgerEntry.objects.filter(user=self.p1).count(), 1)

    def test_points_accumulate_across_events(self):
        other = make_event(title="Clean-up Drive", points_reward=7)
        self.scan(self.p2)
        outcome = self.scan(self.p2, event=other)

        self.assertEqual(outcome.points_awarded, 3)
        self.assertEqual(outcome.total_points, 8)
        self.p2.refresh_from_db()
        self.assertEqual(self.p2.points, 8)

    def test_one_point_event_gives_walk_in_nothing(self):
        event = make_event(title="Short Meeting", points_reward=1)
        outcome = self.scan(self.p2, event=event)

        self.assertTrue(outcome.ok)
        self.assertEqual(outcome.points_awarded, 0)
        self.assertTrue(event.attendees.filter(pk=self.p2.pk).exists())

    def test_unknown_event(self):
        outcome = mark_attendance("EVT-2026-NOPE0000", self.p1.sk_id_number)

        self.assertEqual(outcome.kind, AttendanceOutcome.EVENT_NOT_FOUND)
        self.assertTrue(outcome.is_not_found)
        self.assertFalse(EventAttendance.objects.exists())
        self.assertEqual(ScanLog.objects.get().action, ScanLog.ACTION_INVALID_EVENT)

    def test_unknown_person_leaves_event_untouched(self):
        outcome = mark_attendance(self.event.event_id, "SK-2026-00000000")

        self.assertEqual(outcome.kind, AttendanceOutcome.PERSON_NOT_FOUND)
        self.assertEqual(self.event.registrations.count(), 1)
        self.assertEqual(self.event.attendances.count(), 0)

    def test_identifiers_are_trimmed(self):
        outcome = mark_attendance(f"  {self.event.event_id} ", f"{self.p1.sk_id_number}\n")
        self.assertTrue(outcome.ok)

    def test_draft_and_cancelled_events_refuse_scans(self):
        for status in (Event.STATUS_DRAFT, Event.STATUS_CANCELLED):
            event = make_event(title=f"{status} event", status=status)
            outcome = self.scan(self.p1, event=event)

            self.assertEqual(outcome.kind, AttendanceOutcome.EVENT_CLOSED)
            self.assertFalse(event.attendances.exists())

        self.p1.refresh_from_db()
        self.assertEqual(self.p1.points, 0)

    def test_rescan_after_cancellation_is_duplicate(self):
        self.scan(self.p1)
        self.event.status = Event.STATUS_CANCELLED
        self.event.save()

        outcome = self.scan(self.p1)

        self.assertEqual(outcome.kind, AttendanceOutcome.DUPLICATE)
        self.assertEqual(ScanLog.objects.order_by("-id").first().action, ScanLog.ACTION_ALREADY_RECORDED)

    def test_concurrent_insert_reported_as_duplicate(self):
        with mock.patch.object(EventAttendance.objects, "create", side_effect=IntegrityError("unique")):
            outcome = self.scan(self.p2)

        self.assertEqual(outcome.kind, AttendanceOutcome.DUPLICATE)
        self.p2.refresh_from_db()
        self.assertEqual(self.p2.points, 0)
        self.assertFalse(EventRegistration.objects.filter(event=self.event, user=self.p2).exists())
        self.assertFalse(PointsLedgerEntry.objects.filter(user=self.p2).exists())
        self.assertEqual(ScanLog.objects.get(person=self.p2).action, ScanLog.ACTION_ALREADY_RECORDED)

    def test_completed_event_still_accepts_scans(self):
        event = make_event(title="Finished", status=Event.STATUS_COMPLETED)
        self.assertTrue(self.scan(self.p1, event=event).ok)

    def test_ledger_and_scan_log_written(self):
        self.scan(self.p1)
        self.scan(self.p2)

        reasons = dict(PointsLedgerEntry.objects.values_list("user", "reason"))
        self.assertEqual(reasons[self.p1.pk], PointsLedgerEntry.REASON_EVENT_ATTENDED)
        self.assertEqual(reasons[self.p2.pk], PointsLedgerEntry.REASON_EVENT_WALK_IN)

        actions = list(ScanLog.objects.order_by("id").values_list("action", flat=True))
        self.assertEqual(actions, [ScanLog.ACTION_CHECK_IN, ScanLog.ACTION_WALK_IN])

        attendance = EventAttendance.objects.get(event=self.event, user=self.p1)
        self.assertEqual(attendance.scanned_by, self.admin)
        self.assertEqual(attendance.points_awarded, 10)


class AttendanceHistoryTestCase(TestCase):
    def setUp(self):
        self.person = make_youth("hist")
        self.earlier = make_event(title="Earlier", days_ahead=1)
        self.later = make_event(title="Later", days_ahead=20)
        make_event(title="Unrelated", days_ahead=5)

    def test_lists_registered_and_attended_newest_first(self):
        EventRegistration.objects.create(event=self.later, user=self.person)
        mark_attendance(self.earlier.event_id, self.person.sk_id_number)

        rows = attendance_history(self.person)

        self.assertEqual([r["title"] for r in rows], ["Later", "Earlier"])
        self.assertFalse(rows[0]["attended"])
        self.assertTrue(rows[1]["attended"])
        self.assertIsNotNone(rows[1]["registered_at"])

    def test_empty_for_new_member(self):
        self.assertEqual(attendance_history(self.person), [])
