# events/models.py
import uuid

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


def generate_event_id(today=None) -> str:
    """EVT-<year>-<first uuid4 block, upper-cased>, e.g. EVT-2026-AB12CD34."""
    year = (today or timezone.now()).year
    return f"EVT-{year}-{uuid.uuid4().hex[:8].upper()}"


class Event(models.Model):
    STATUS_DRAFT = "Draft"
    STATUS_PUBLISHED = "Published"
    STATUS_CANCELLED = "Cancelled"
    STATUS_COMPLETED = "Completed"

    STATUS_CHOICES = [
        (STATUS_DRAFT, "Draft"),
        (STATUS_PUBLISHED, "Published"),
        (STATUS_CANCELLED, "Cancelled"),
        (STATUS_COMPLETED, "Completed"),
    ]

    CATEGORY_CHOICES = [
        (value, value)
        for value in ("Sports", "Educational", "Cultural", "Health", "Environmental", "Social", "Others")
    ]

    # Human-readable code printed on the event QR, e.g. EVT-2026-AB12CD34
    event_id = models.CharField(max_length=32, unique=True, editable=False)
    qr_code = models.CharField(max_length=64, blank=True, default="")

    title = models.CharField(max_length=255)
    description = models.TextField()
    event_date = models.DateField()
    start_time = models.TimeField()
    end_time = models.TimeField()
    location = models.CharField(max_length=255)
    venue = models.CharField(max_length=255)
    category = models.CharField(max_length=32, choices=CATEGORY_CHOICES)
    poster_image = models.CharField(max_length=1024, blank=True, null=True)
    points_reward = models.PositiveIntegerField(default=10)
    max_capacity = models.PositiveIntegerField(blank=True, null=True, validators=[MinValueValidator(1)])

    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_DRAFT)

    registered = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through="EventRegistration",
        through_fields=("event", "user"),
        related_name="registered_events",
        blank=True,
    )
    attendees = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through="EventAttendance",
        through_fields=("event", "user"),
        related_name="attended_events",
        blank=True,
    )

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="created_events",
        null=True,
        blank=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=["status", "event_date"], name="event_status_date_idx"),
            models.Index(fields=["event_date"], name="event_date_idx"),
        ]

    def __str__(self):
        return f"{self.event_id} {self.title}"

    def save(self, *args, **kwargs):
        if not self.event_id:
            candidate = generate_event_id()
            while Event.objects.filter(event_id=candidate).exists():
                candidate = generate_event_id()
            self.event_id = candidate
            # The event QR simply carries the event code
            self.qr_code = candidate
        super().save(*args, **kwargs)

    @property
    def registered_count(self) -> int:
        return self.registrations.count()

    @property
    def attendees_count(self) -> int:
        return self.attendances.count()

    @property
    def is_full(self) -> bool:
        return bool(self.max_capacity) and self.registered_count >= self.max_capacity


class EventRegistration(models.Model):
    """
    Membership row of Event.registered. Walk-ins get a row at the moment
    their attendance is recorded.
    """
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="registrations")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="event_registrations",
    )
    registered_at = models.DateTimeField(auto_now_add=True)
    is_walk_in = models.BooleanField(default=False)

    class Meta:
        unique_together = ("event", "user")
        indexes = [
            models.Index(fields=["event", "registered_at"], name="reg_event_registered_idx"),
            models.Index(fields=["user", "event"], name="reg_user_event_idx"),
        ]

    def __str__(self):
        return f"{self.user} -> {self.event.event_id}"


class EventAttendance(models.Model):
    """
    Membership row of Event.attendees. The (event, user) uniqueness is what
    makes attendance recordable at most once.
    """
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="attendances")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="event_attendances",
    )
    checked_in_at = models.DateTimeField(auto_now_add=True)
    scanned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="scanned_attendances",
        null=True,
        blank=True,
    )
    was_pre_registered = models.BooleanField(default=True)
    points_awarded = models.PositiveIntegerField(default=0)

    class Meta:
        unique_together = ("event", "user")
        indexes = [
            models.Index(fields=["event", "checked_in_at"], name="att_event_checked_in_idx"),
        ]

    def __str__(self):
        return f"{self.user} @ {self.event.event_id}"


class ScanLog(models.Model):
    """
    Audit log for attendance scans.
    Stores who scanned, what was scanned, which event/person (if resolved),
    IP address, outcome, and timestamp.
    """
    ACTION_CHECK_IN = "check_in"
    ACTION_WALK_IN = "walk_in"
    ACTION_ALREADY_RECORDED = "already_recorded"
    ACTION_INVALID_EVENT = "invalid_event"
    ACTION_INVALID_PERSON = "invalid_person"
    ACTION_EVENT_CLOSED = "event_closed"

    ACTION_CHOICES = [
        (ACTION_CHECK_IN, "Check-in"),
        (ACTION_WALK_IN, "Walk-in check-in"),
        (ACTION_ALREADY_RECORDED, "Already recorded"),
        (ACTION_INVALID_EVENT, "Invalid event"),
        (ACTION_INVALID_PERSON, "Invalid person"),
        (ACTION_EVENT_CLOSED, "Event closed"),
    ]

    event = models.ForeignKey(
        Event,
        on_delete=models.CASCADE,
        related_name="scan_logs",
        null=True,
        blank=True,
    )
    person = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="scan_logs",
        null=True,
        blank=True,
    )
    scanned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="performed_scans",
        null=True,
        blank=True,
    )
    event_code = models.CharField(max_length=64)
    person_code = models.CharField(max_length=128)
    ip_address = models.CharField(max_length=64, null=True, blank=True)
    action = models.CharField(max_length=32, choices=ACTION_CHOICES)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=["event", "created_at"], name="scanlog_event_created_idx"),
            models.Index(fields=["action", "created_at"], name="scanlog_action_created_idx"),
        ]

    def __str__(self):
        return f"{self.scanned_by} - {self.person_code} - {self.action}"
