import re
from datetime import date

from django.core import mail
from django.core.cache import cache
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from users.models import User, generate_sk_id_number

SK_ID_PATTERN = re.compile(r"^SK-\d{4}-[0-9A-F]{8}$")


class UserModelTestCase(TestCase):
    def test_generated_sk_id_format(self):
        self.assertRegex(generate_sk_id_number(), SK_ID_PATTERN)

    def test_approve_keeps_existing_id(self):
        user = User.objects.create_user(username="keep", password="pass")
        first = user.approve()
        user.save()

        self.assertEqual(user.approve(), first)
        self.assertEqual(user.qr_code, first)
        self.assertEqual(user.status, User.STATUS_APPROVED)

    def test_age_group(self):
        today = date.today()
        user = User(birthday=date(today.year - 20, 1, 1))
        self.assertEqual(user.youth_age_group, "Core Youth (18-24 yrs old)")
        self.assertEqual(User().youth_age_group, "N/A")


class AdminUserApiTestCase(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()
        self.admin = User.objects.create_user(username="admin", password="pass", role=User.ROLE_ADMIN)
        self.pending = User.objects.create_user(
            username="pending@example.com",
            email="pending@example.com",
            password="pass",
            first_name="Lea",
            purok="Purok 2",
        )
        self.client.force_authenticate(user=self.admin)

    def test_pending_list(self):
        resp = self.client.get("/api/users/admin/pending/")

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual([u["id"] for u in resp.json()], [self.pending.pk])

    def test_filter_by_purok(self):
        resp = self.client.get("/api/users/admin/", {"purok": "Purok 5"})
        self.assertEqual(resp.json(), [])

    def test_approve_issues_sk_id_and_emails(self):
        resp = self.client.post(f"/api/users/admin/{self.pending.pk}/approve/")

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertRegex(resp.json()["sk_id_number"], SK_ID_PATTERN)
        self.pending.refresh_from_db()
        self.assertEqual(self.pending.status, User.STATUS_APPROVED)
        self.assertEqual(self.pending.qr_code, self.pending.sk_id_number)
        self.assertEqual(len(mail.outbox), 1)
        self.assertIn(self.pending.sk_id_number, mail.outbox[0].body)

    def test_archived_cannot_be_approved(self):
        self.pending.status = User.STATUS_ARCHIVED
        self.pending.save()

        resp = self.client.post(f"/api/users/admin/{self.pending.pk}/approve/")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

    def test_reject(self):
        resp = self.client.post(f"/api/users/admin/{self.pending.pk}/reject/")

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.pending.refresh_from_db()
        self.assertEqual(self.pending.status, User.STATUS_REJECTED)
        self.assertIsNone(self.pending.sk_id_number)

    def test_print_tracking(self):
        resp = self.client.post(f"/api/users/admin/{self.pending.pk}/mark-printed/")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

        self.client.post(f"/api/users/admin/{self.pending.pk}/approve/")
        resp = self.client.post(f"/api/users/admin/{self.pending.pk}/mark-printed/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertTrue(resp.json()["user"]["id_printed"])

        resp = self.client.post(f"/api/users/admin/{self.pending.pk}/reset-print/")
        self.assertFalse(resp.json()["user"]["id_printed"])
        self.assertIsNone(resp.json()["user"]["id_printed_at"])

    def test_qr_requires_sk_id(self):
        resp = self.client.get(f"/api/users/admin/{self.pending.pk}/qr/")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

        self.client.post(f"/api/users/admin/{self.pending.pk}/approve/")
        resp = self.client.get(f"/api/users/admin/{self.pending.pk}/qr/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp["Content-Type"], "image/png")

    def test_youth_cannot_review(self):
        self.client.force_authenticate(user=self.pending)
        resp = self.client.get("/api/users/admin/")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)


class MeProfileApiTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(username="me", email="me@example.com", password="pass")
        self.client.force_authenticate(user=self.user)

    def test_registry_fields_are_read_only(self):
        resp = self.client.patch(
            "/api/users/me/",
            {"street": "Rizal St.", "points": 999, "status": "Approved"},
            format="json",
        )

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertEqual(self.user.street, "Rizal St.")
        self.assertEqual(self.user.points, 0)
        self.assertEqual(self.user.status, User.STATUS_PENDING)
