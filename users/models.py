# users/models.py
import uuid
from datetime import date

from django.contrib.auth.models import AbstractUser
from django.db import models
from django.utils import timezone


PUROK_CHOICES = [(f"Purok {n}", f"Purok {n}") for n in range(1, 8)]

CIVIL_STATUS_CHOICES = [
    (value, value)
    for value in ("Single", "Married", "Widowed", "Separated", "Live-in", "Annulled", "Others")
]

EDUCATION_CHOICES = [
    (value, value)
    for value in (
        "Elementary Level",
        "Elementary Grad",
        "High School Level",
        "High School Grad",
        "Vocational Grad",
        "College Level",
        "College Grad",
        "Masters Level",
        "Masters Grad",
        "Doctorate Level",
        "Doctorate Graduate",
    )
]

YOUTH_CLASSIFICATION_CHOICES = [
    (value, value)
    for value in (
        "In School Youth",
        "Out of School Youth",
        "Working Youth",
        "Youth with Specific Needs",
    )
]

WORK_STATUS_CHOICES = [
    (value, value)
    for value in (
        "Employed",
        "Unemployed",
        "Self-Employed",
        "Currently looking for a Job",
        "Not Interested Looking for a Job",
    )
]


def generate_sk_id_number(today=None) -> str:
    """SK-<year>-<first uuid4 block, upper-cased>, e.g. SK-2026-3F2A9C1B."""
    year = (today or timezone.now()).year
    return f"SK-{year}-{uuid.uuid4().hex[:8].upper()}"


class User(AbstractUser):
    ROLE_YOUTH = "youth"
    ROLE_ADMIN = "admin"

    ROLE_CHOICES = (
        (ROLE_YOUTH, 'Youth'),
        (ROLE_ADMIN, 'Admin'),
    )

    STATUS_PENDING = "Pending"
    STATUS_APPROVED = "Approved"
    STATUS_REJECTED = "Rejected"
    STATUS_ARCHIVED = "Archived"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_APPROVED, "Approved"),
        (STATUS_REJECTED, "Rejected"),
        (STATUS_ARCHIVED, "Archived"),
    ]

    SEX_CHOICES = [("Male", "Male"), ("Female", "Female")]

    role = models.CharField(
        max_length=30,
        choices=ROLE_CHOICES,
        default=ROLE_YOUTH
    )

    # --- Personal information (first/last name come from AbstractUser) ---
    middle_name = models.CharField(max_length=150, blank=True, default="")
    suffix = models.CharField(max_length=20, blank=True, default="")
    sex = models.CharField(max_length=10, choices=SEX_CHOICES, blank=True, default="")
    birthday = models.DateField(blank=True, null=True)
    profile_picture = models.CharField(max_length=1024, blank=True, null=True)

    # --- Address ---
    block = models.CharField(max_length=50, blank=True, default="")
    lot = models.CharField(max_length=50, blank=True, default="")
    house_number = models.CharField(max_length=50, blank=True, default="")
    street = models.CharField(max_length=255, blank=True, default="")
    purok = models.CharField(max_length=20, choices=PUROK_CHOICES, blank=True, default="")

    contact_number = models.CharField(max_length=20, blank=True, default="")

    # --- Demographics ---
    civil_status = models.CharField(max_length=20, choices=CIVIL_STATUS_CHOICES, blank=True, default="")
    educational_background = models.CharField(max_length=40, choices=EDUCATION_CHOICES, blank=True, default="")
    youth_classification = models.CharField(
        max_length=40, choices=YOUTH_CLASSIFICATION_CHOICES, blank=True, default=""
    )
    work_status = models.CharField(max_length=40, choices=WORK_STATUS_CHOICES, blank=True, default="")

    registered_sk_voter = models.BooleanField(default=False)
    registered_national_voter = models.BooleanField(default=False)
    is_pwd = models.BooleanField(default=False)
    is_cicwl = models.BooleanField(default=False, help_text="Child in conflict with the law")
    is_indigenous = models.BooleanField(default=False)

    # --- Registry data ---
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    # Issued only on approval; the printed ID's QR encodes this value
    sk_id_number = models.CharField(max_length=32, unique=True, blank=True, null=True)
    qr_code = models.CharField(max_length=64, blank=True, null=True)
    id_printed = models.BooleanField(default=False)
    id_printed_at = models.DateTimeField(blank=True, null=True)

    # Running total; only ever incremented by attendance crediting
    points = models.PositiveIntegerField(default=0)

    class Meta:
        indexes = [
            models.Index(fields=["status"], name="user_status_idx"),
        ]

    def __str__(self):
        return self.sk_id_number or self.username

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip() or self.username

    @property
    def is_registry_admin(self) -> bool:
        return self.is_superuser or self.is_staff or self.role == self.ROLE_ADMIN

    @property
    def age(self) -> int:
        if not self.birthday:
            return 0
        today = date.today()
        years = today.year - self.birthday.year
        if (today.month, today.day) < (self.birthday.month, self.birthday.day):
            years -= 1
        return years

    @property
    def youth_age_group(self) -> str:
        age = self.age
        if 15 <= age <= 17:
            return "Child Youth (15-17 yrs old)"
        if 18 <= age <= 24:
            return "Core Youth (18-24 yrs old)"
        if 25 <= age <= 30:
            return "Young Adult (25-30 yrs old)"
        return "N/A"

    def approve(self):
        """
        Mark the profile approved and issue an SK ID (idempotent: an already
        issued ID is kept). Caller saves.
        """
        if not self.sk_id_number:
            candidate = generate_sk_id_number()
            while User.objects.filter(sk_id_number=candidate).exists():
                candidate = generate_sk_id_number()
            self.sk_id_number = candidate
        self.qr_code = self.sk_id_number
        self.status = self.STATUS_APPROVED
        return self.sk_id_number
