from django.core.cache import cache
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from events.models import Event, EventRegistration
from .factories import make_admin, make_event, make_youth

ATTENDANCE_URL = "/api/events/attendance/"


class MarkAttendanceApiTestCase(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.admin = make_admin()
        self.youth = make_youth("juan", "Juan", "Dela Cruz")
        self.event = make_event(points_reward=10)
        self.client.force_authenticate(user=self.admin)

    def post(self, event_id, sk_id_number):
        return self.client.post(
            ATTENDANCE_URL,
            {"event_id": event_id, "sk_id_number": sk_id_number},
            format="json",
        )

    def test_walk_in_success(self):
        resp = self.post(self.event.event_id, self.youth.sk_id_number)

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        data = resp.json()
        self.assertTrue(data["success"])
        self.assertFalse(data["was_pre_registered"])
        self.assertEqual(data["points_awarded"], 5)
        self.assertEqual(data["total_points"], 5)
        self.assertEqual(data["user"], {"name": "Juan Dela Cruz", "sk_id_number": self.youth.sk_id_number})

    def test_pre_registered_success(self):
        EventRegistration.objects.create(event=self.event, user=self.youth)
        resp = self.post(self.event.event_id, self.youth.sk_id_number)

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertTrue(resp.json()["was_pre_registered"])
        self.assertEqual(resp.json()["points_awarded"], 10)

    def test_duplicate_is_conflict(self):
        self.post(self.event.event_id, self.youth.sk_id_number)
        resp = self.post(self.event.event_id, self.youth.sk_id_number)

        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertTrue(resp.json()["duplicate"])
        self.assertEqual(resp.json()["message"], "Attendance already recorded for this user")

    def test_missing_fields(self):
        resp = self.client.post(ATTENDANCE_URL, {"event_id": self.event.event_id}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.json()["error"], "Event ID and SK ID are required")

    def test_unknown_event_and_person(self):
        resp = self.post("EVT-2026-00000000", self.youth.sk_id_number)
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.json()["not_found"], "event")

        resp = self.post(self.event.event_id, "SK-2026-00000000")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.json()["not_found"], "person")

    def test_cancelled_event_is_closed(self):
        self.event.status = Event.STATUS_CANCELLED
        self.event.save()

        resp = self.post(self.event.event_id, self.youth.sk_id_number)
        self.assertEqual(resp.status_code, status.HTTP_409_CONFLICT)
        self.assertTrue(resp.json()["event_closed"])

    def test_youth_cannot_scan(self):
        self.client.force_authenticate(user=self.youth)
        resp = self.post(self.event.event_id, self.youth.sk_id_number)

        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(resp.json()["success"])

    def test_anonymous_cannot_scan(self):
        self.client.force_authenticate(user=None)
        resp = self.post(self.event.event_id, self.youth.sk_id_number)
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)


class AttendanceHistoryApiTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.admin = make_admin()
        self.youth = make_youth("maria")
        self.event = make_event(title="Sportsfest")

    def test_admin_reads_member_history(self):
        self.client.force_authenticate(user=self.admin)
        self.client.post(
            ATTENDANCE_URL,
            {"event_id": self.event.event_id, "sk_id_number": self.youth.sk_id_number},
            format="json",
        )

        resp = self.client.get(f"/api/events/user/{self.youth.pk}/attendance/")

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        data = resp.json()
        self.assertEqual(len(data), 1)
        self.assertEqual(data[0]["event_id"], self.event.event_id)
        self.assertTrue(data[0]["attended"])

    def test_unknown_member_404(self):
        self.client.force_authenticate(user=self.admin)
        resp = self.client.get("/api/events/user/99999/attendance/")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    def test_youth_cannot_read_history(self):
        self.client.force_authenticate(user=self.youth)
        resp = self.client.get(f"/api/events/user/{self.youth.pk}/attendance/")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
