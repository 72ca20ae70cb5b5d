from django.db import models
from django.conf import settings

class PointsLedgerEntry(models.Model):
    """
    Immutable audit trail of points credited to a youth member.
    Linked to the event that earned them ("Why did I get points?").
    """
    REASON_EVENT_ATTENDED = "event.attended"
    REASON_EVENT_WALK_IN = "event.walk_in"

    REASON_CHOICES = [
        (REASON_EVENT_ATTENDED, "Attended (pre-registered)"),
        (REASON_EVENT_WALK_IN, "Attended (walk-in)"),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="points_ledger",
    )
    event = models.ForeignKey(
        "events.Event",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="points_ledger",
    )

    amount = models.PositiveIntegerField(help_text="Points credited (never negative)")
    reason = models.CharField(max_length=64, choices=REASON_CHOICES)
    balance_after = models.PositiveIntegerField()

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=["user", "-created_at"], name="ledger_user_created_idx"),
        ]

    def __str__(self):
        return f"{self.user} (+{self.amount}): {self.reason}"
