import sys

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from events.scanner import AttendanceScanner, DuplicateScanGuard, ScanFeedback


class Command(BaseCommand):
    help = (
        "Read decoded QR payloads (one per line) from stdin and mark attendance "
        "for an event. Works with keyboard-wedge barcode scanners."
    )
    stealth_options = ("stdin",)

    def add_arguments(self, parser):
        parser.add_argument("--event", required=True, help="Event code, e.g. EVT-2026-AB12CD34")
        parser.add_argument("--api-url", default=settings.REGISTRY_API_URL)
        parser.add_argument("--token", default=None, help="Admin access token (Bearer)")
        parser.add_argument("--cooldown", type=float, default=settings.SCAN_COOLDOWN_SECONDS)

    def handle(self, *args, **options):
        if options["cooldown"] < 0:
            raise CommandError("--cooldown must not be negative")

        scanner = AttendanceScanner(
            options["api_url"],
            options["event"],
            token=options["token"],
            guard=DuplicateScanGuard(cooldown=options["cooldown"]),
        )

        stdin = options.get("stdin") or sys.stdin
        self.stdout.write(f"Scanning for {options['event']} (Ctrl-D to stop)")

        counts = {}
        for line in stdin:
            raw = line.strip()
            if not raw:
                continue

            feedback = scanner.handle_scan(raw)
            counts[feedback.status] = counts.get(feedback.status, 0) + 1

            if feedback.status == ScanFeedback.SUPPRESSED:
                continue
            self.stdout.write(self._format(feedback))

        scanner.reset()
        summary = ", ".join(f"{status}={n}" for status, n in sorted(counts.items())) or "no scans"
        self.stdout.write(f"Stopped. {summary}")

    def _format(self, feedback):
        user = feedback.data.get("user") or {}
        who = user.get("name") or user.get("sk_id_number") or ""

        if feedback.status == ScanFeedback.SUCCESS:
            points = feedback.data.get("points_awarded", 0)
            total = feedback.data.get("total_points")
            return self.style.SUCCESS(f"OK   {who}: {feedback.message} (+{points}, total {total})")
        if feedback.status == ScanFeedback.DUPLICATE:
            return self.style.WARNING(f"DUP  {who}: {feedback.message}")
        return self.style.ERROR(f"ERR  {feedback.message}")
