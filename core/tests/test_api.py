from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient


class HealthCheckTestCase(TestCase):
    def test_health_is_public(self):
        resp = APIClient().get("/api/health/")

        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json()["status"], "ok")
        self.assertTrue(resp.json()["db"])


class ExceptionEnvelopeTestCase(TestCase):
    def test_drf_errors_are_wrapped(self):
        resp = APIClient().get("/api/users/me/")

        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        body = resp.json()
        self.assertFalse(body["success"])
        self.assertEqual(body["status_code"], 401)
        self.assertIn("detail", body["errors"])
        self.assertIn("WWW-Authenticate", resp)
