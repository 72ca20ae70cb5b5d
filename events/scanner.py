# events/scanner.py
"""
Client side of QR attendance scanning.

A camera (or keyboard-wedge scanner) decodes the same badge over and over
while it is held in front of the lens. DuplicateScanGuard drops repeats of
the last value inside a short cooldown so only the first decode reaches the
server; AttendanceScanner wires the guard to the mark-attendance endpoint.
"""
from dataclasses import dataclass, field
from typing import Callable, Optional
import json
import logging
import time

import requests

logger = logging.getLogger('sk.scanner')

DEFAULT_COOLDOWN_SECONDS = 5.0
REQUEST_TIMEOUT_SECONDS = 10

# Keys a JSON QR payload may carry the SK ID under
PAYLOAD_ID_KEYS = ("skIdNumber", "sk_id_number", "skId", "id")


class DuplicateScanGuard:
    """Single-slot memory of the last decoded value and when it was seen."""

    def __init__(self, cooldown: float = DEFAULT_COOLDOWN_SECONDS, clock: Callable[[], float] = time.monotonic):
        self.cooldown = cooldown
        self.clock = clock
        self.last_value: Optional[str] = None
        self.last_seen: float = 0.0

    def should_suppress(self, value: str, now: Optional[float] = None) -> bool:
        """
        True when `value` repeats the last decode within the cooldown.
        Otherwise remembers `value` as the last decode and returns False.
        """
        if now is None:
            now = self.clock()

        if value == self.last_value and now - self.last_seen < self.cooldown:
            return True

        self.last_value = value
        self.last_seen = now
        return False

    def clear(self) -> None:
        self.last_value = None
        self.last_seen = 0.0


def parse_scan_payload(raw) -> Optional[str]:
    """
    Extract the SK ID from a decoded QR payload.

    Accepts a JSON object ({"skIdNumber": "SK-2026-..."}) or the plain ID.
    Returns None when nothing usable is found.
    """
    if raw is None:
        return None

    text = str(raw).strip()
    if not text:
        return None

    try:
        parsed = json.loads(text)
    except ValueError:
        return text

    if isinstance(parsed, dict):
        for key in PAYLOAD_ID_KEYS:
            value = parsed.get(key)
            if value:
                return str(value).strip()
        return None

    if isinstance(parsed, str) and parsed.strip():
        return parsed.strip()

    # Bare numbers etc. are printed IDs that happen to parse as JSON
    return text


@dataclass
class ScanFeedback:
    SUPPRESSED = "suppressed"
    INVALID = "invalid"
    SUCCESS = "success"
    DUPLICATE = "duplicate"
    ERROR = "error"

    status: str
    message: str = ""
    data: dict = field(default_factory=dict)

    @property
    def reached_server(self) -> bool:
        return self.status not in (self.SUPPRESSED, self.INVALID)


class AttendanceScanner:
    """
    Submits decoded QR payloads for one event.

        scanner = AttendanceScanner("http://host/api", "EVT-2026-AB12CD34", token)
        feedback = scanner.handle_scan(decoded_text)
    """

    def __init__(self, base_url: str, event_id: str, token: Optional[str] = None,
                 session: Optional[requests.Session] = None,
                 guard: Optional[DuplicateScanGuard] = None):
        self.url = f"{base_url.rstrip('/')}/events/attendance/"
        self.event_id = event_id
        self.session = session or requests.Session()
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"
        self.guard = guard or DuplicateScanGuard()

    def handle_scan(self, raw, now: Optional[float] = None) -> ScanFeedback:
        text = "" if raw is None else str(raw).strip()

        if self.guard.should_suppress(text, now=now):
            logger.debug("Duplicate scan detected, ignoring")
            return ScanFeedback(ScanFeedback.SUPPRESSED, "Duplicate scan ignored")

        sk_id_number = parse_scan_payload(text)
        if not sk_id_number:
            return ScanFeedback(ScanFeedback.INVALID, "Invalid QR code format")

        try:
            response = self.session.post(
                self.url,
                json={"event_id": self.event_id, "sk_id_number": sk_id_number},
                timeout=REQUEST_TIMEOUT_SECONDS,
            )
        except requests.RequestException as exc:
            logger.warning(f"Attendance request failed for {sk_id_number}: {exc}")
            self.guard.clear()
            return ScanFeedback(ScanFeedback.ERROR, "Failed to connect to server")

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.ok:
            return ScanFeedback(ScanFeedback.SUCCESS, body.get("message", "Attendance marked"), body)

        if body.get("duplicate") or body.get("already_recorded"):
            # Not an error: the badge was already checked in
            return ScanFeedback(ScanFeedback.DUPLICATE, body.get("message", "Already recorded"), body)

        # Any other failure: forget the value so re-presenting the badge retries at once
        self.guard.clear()
        message = body.get("error") or body.get("message") or f"Server returned {response.status_code}"
        logger.warning(f"Attendance rejected for {sk_id_number}: {response.status_code} {message}")
        return ScanFeedback(ScanFeedback.ERROR, message, body)

    def reset(self) -> None:
        """Forget the last scan, e.g. when the scanner is closed."""
        self.guard.clear()
