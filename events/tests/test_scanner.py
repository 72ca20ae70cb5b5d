from unittest import mock

import requests
from django.test import SimpleTestCase

from events.scanner import AttendanceScanner, DuplicateScanGuard, ScanFeedback, parse_scan_payload


def fake_response(status_code, body):
    response = mock.Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.json.return_value = body
    return response


class DuplicateScanGuardTestCase(SimpleTestCase):
    def test_repeat_inside_cooldown_is_suppressed(self):
        guard = DuplicateScanGuard(cooldown=5)
        self.assertFalse(guard.should_suppress("SK-2026-AAAA0000", now=100.0))
        self.assertTrue(guard.should_suppress("SK-2026-AAAA0000", now=104.9))

    def test_repeat_after_cooldown_passes(self):
        guard = DuplicateScanGuard(cooldown=5)
        guard.should_suppress("SK-2026-AAAA0000", now=100.0)
        self.assertFalse(guard.should_suppress("SK-2026-AAAA0000", now=105.0))

    def test_suppressed_repeat_does_not_extend_window(self):
        guard = DuplicateScanGuard(cooldown=5)
        guard.should_suppress("A", now=0.0)
        guard.should_suppress("A", now=4.0)
        self.assertFalse(guard.should_suppress("A", now=5.5))

    def test_only_last_value_is_remembered(self):
        guard = DuplicateScanGuard(cooldown=5)
        guard.should_suppress("A", now=0.0)
        self.assertFalse(guard.should_suppress("B", now=1.0))
        self.assertFalse(guard.should_suppress("A", now=2.0))

    def test_clear_forgets_last_value(self):
        guard = DuplicateScanGuard(cooldown=5)
        guard.should_suppress("A", now=0.0)
        guard.clear()
        self.assertFalse(guard.should_suppress("A", now=1.0))

    def test_uses_clock_when_now_omitted(self):
        clock = mock.Mock(side_effect=[10.0, 12.0])
        guard = DuplicateScanGuard(cooldown=5, clock=clock)
        guard.should_suppress("A")
        self.assertTrue(guard.should_suppress("A"))


class ParseScanPayloadTestCase(SimpleTestCase):
    def test_plain_id(self):
        self.assertEqual(parse_scan_payload(" SK-2026-3F2A9C1B \n"), "SK-2026-3F2A9C1B")

    def test_json_object(self):
        self.assertEqual(parse_scan_payload('{"skIdNumber": "SK-2026-3F2A9C1B"}'), "SK-2026-3F2A9C1B")
        self.assertEqual(parse_scan_payload('{"sk_id_number": "SK-1"}'), "SK-1")

    def test_json_without_id(self):
        self.assertIsNone(parse_scan_payload('{"name": "Juan"}'))

    def test_blank(self):
        self.assertIsNone(parse_scan_payload(""))
        self.assertIsNone(parse_scan_payload(None))


class AttendanceScannerTestCase(SimpleTestCase):
    def setUp(self):
        self.session = mock.Mock()
        self.session.headers = {}
        self.scanner = AttendanceScanner(
            "http://registry.test/api/",
            "EVT-2026-AB12CD34",
            token="tok",
            session=self.session,
            guard=DuplicateScanGuard(cooldown=5),
        )

    def test_posts_event_and_sk_id(self):
        self.session.post.return_value = fake_response(200, {"success": True, "message": "Attendance marked successfully"})

        feedback = self.scanner.handle_scan("SK-2026-3F2A9C1B", now=0.0)

        self.assertEqual(feedback.status, ScanFeedback.SUCCESS)
        self.assertEqual(self.session.headers["Authorization"], "Bearer tok")
        args, kwargs = self.session.post.call_args
        self.assertEqual(args[0], "http://registry.test/api/events/attendance/")
        self.assertEqual(kwargs["json"], {"event_id": "EVT-2026-AB12CD34", "sk_id_number": "SK-2026-3F2A9C1B"})

    def test_repeat_within_cooldown_never_reaches_server(self):
        self.session.post.return_value = fake_response(200, {"success": True})

        self.scanner.handle_scan("SK-1", now=0.0)
        feedback = self.scanner.handle_scan("SK-1", now=2.0)

        self.assertEqual(feedback.status, ScanFeedback.SUPPRESSED)
        self.assertFalse(feedback.reached_server)
        self.assertEqual(self.session.post.call_count, 1)

        self.scanner.handle_scan("SK-1", now=6.0)
        self.assertEqual(self.session.post.call_count, 2)

    def test_duplicate_attendance_keeps_guard(self):
        self.session.post.return_value = fake_response(409, {"duplicate": True, "message": "Attendance already recorded for this user"})

        feedback = self.scanner.handle_scan("SK-1", now=0.0)
        self.assertEqual(feedback.status, ScanFeedback.DUPLICATE)

        self.assertEqual(self.scanner.handle_scan("SK-1", now=1.0).status, ScanFeedback.SUPPRESSED)

    def test_server_error_clears_guard(self):
        self.session.post.return_value = fake_response(404, {"error": "User not found with this SK ID"})

        feedback = self.scanner.handle_scan("SK-1", now=0.0)
        self.assertEqual(feedback.status, ScanFeedback.ERROR)
        self.assertEqual(feedback.message, "User not found with this SK ID")

        self.scanner.handle_scan("SK-1", now=1.0)
        self.assertEqual(self.session.post.call_count, 2)

    def test_network_failure_clears_guard(self):
        self.session.post.side_effect = requests.ConnectionError("down")

        feedback = self.scanner.handle_scan("SK-1", now=0.0)
        self.assertEqual(feedback.status, ScanFeedback.ERROR)
        self.assertIsNone(self.scanner.guard.last_value)

    def test_invalid_payload_not_sent(self):
        feedback = self.scanner.handle_scan('{"name": "Juan"}', now=0.0)

        self.assertEqual(feedback.status, ScanFeedback.INVALID)
        self.session.post.assert_not_called()
