import django.contrib.auth.models
import django.contrib.auth.validators
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                (
                    "is_superuser",
                    models.BooleanField(
                        default=False,
                        help_text="Designates that this user has all permissions without explicitly assigning them.",
                        verbose_name="superuser status",
                    ),
                ),
                (
                    "username",
                    models.CharField(
                        error_messages={"unique": "A user with that username already exists."},
                        help_text="Required. 150 characters or fewer. Letters, digits and @/./+/-/_ only.",
                        max_length=150,
                        unique=True,
                        validators=[django.contrib.auth.validators.UnicodeUsernameValidator()],
                        verbose_name="username",
                    ),
                ),
                ("first_name", models.CharField(blank=True, max_length=150, verbose_name="first name")),
                ("last_name", models.CharField(blank=True, max_length=150, verbose_name="last name")),
                ("email", models.EmailField(blank=True, max_length=254, verbose_name="email address")),
                (
                    "is_staff",
                    models.BooleanField(
                        default=False,
                        help_text="Designates whether the user can log into this admin site.",
                        verbose_name="staff status",
                    ),
                ),
                (
                    "is_active",
                    models.BooleanField(
                        default=True,
                        help_text="Designates whether this user should be treated as active. "
                        "Unselect this instead of deleting accounts.",
                        verbose_name="active",
                    ),
                ),
                ("date_joined", models.DateTimeField(default=django.utils.timezone.now, verbose_name="date joined")),
                (
                    "role",
                    models.CharField(choices=[("youth", "Youth"), ("admin", "Admin")], default="youth", max_length=30),
                ),
                ("middle_name", models.CharField(blank=True, default="", max_length=150)),
                ("suffix", models.CharField(blank=True, default="", max_length=20)),
                (
                    "sex",
                    models.CharField(
                        blank=True, choices=[("Male", "Male"), ("Female", "Female")], default="", max_length=10
                    ),
                ),
                ("birthday", models.DateField(blank=True, null=True)),
                ("profile_picture", models.CharField(blank=True, max_length=1024, null=True)),
                ("block", models.CharField(blank=True, default="", max_length=50)),
                ("lot", models.CharField(blank=True, default="", max_length=50)),
                ("house_number", models.CharField(blank=True, default="", max_length=50)),
                ("street", models.CharField(blank=True, default="", max_length=255)),
                (
                    "purok",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("Purok 1", "Purok 1"),
                            ("Purok 2", "Purok 2"),
                            ("Purok 3", "Purok 3"),
                            ("Purok 4", "Purok 4"),
                            ("Purok 5", "Purok 5"),
                            ("Purok 6", "Purok 6"),
                            ("Purok 7", "Purok 7"),
                        ],
                        default="",
                        max_length=20,
                    ),
                ),
                ("contact_number", models.CharField(blank=True, default="", max_length=20)),
                (
                    "civil_status",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("Single", "Single"),
                            ("Married", "Married"),
                            ("Widowed", "Widowed"),
                            ("Separated", "Separated"),
                            ("Live-in", "Live-in"),
                            ("Annulled", "Annulled"),
                            ("Others", "Others"),
                        ],
                        default="",
                        max_length=20,
                    ),
                ),
                (
                    "educational_background",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("Elementary Level", "Elementary Level"),
                            ("Elementary Grad", "Elementary Grad"),
                            ("High School Level", "High School Level"),
                            ("High School Grad", "High School Grad"),
                            ("Vocational Grad", "Vocational Grad"),
                            ("College Level", "College Level"),
                            ("College Grad", "College Grad"),
                            ("Masters Level", "Masters Level"),
                            ("Masters Grad", "Masters Grad"),
                            ("Doctorate Level", "Doctorate Level"),
                            ("Doctorate Graduate", "Doctorate Graduate"),
                        ],
                        default="",
                        max_length=40,
                    ),
                ),
                (
                    "youth_classification",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("In School Youth", "In School Youth"),
                            ("Out of School Youth", "Out of School Youth"),
                            ("Working Youth", "Working Youth"),
                            ("Youth with Specific Needs", "Youth with Specific Needs"),
                        ],
                        default="",
                        max_length=40,
                    ),
                ),
                (
                    "work_status",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("Employed", "Employed"),
                            ("Unemployed", "Unemployed"),
                            ("Self-Employed", "Self-Employed"),
                            ("Currently looking for a Job", "Currently looking for a Job"),
                            ("Not Interested Looking for a Job", "Not Interested Looking for a Job"),
                        ],
                        default="",
                        max_length=40,
                    ),
                ),
                ("registered_sk_voter", models.BooleanField(default=False)),
                ("registered_national_voter", models.BooleanField(default=False)),
                ("is_pwd", models.BooleanField(default=False)),
                ("is_cicwl", models.BooleanField(default=False, help_text="Child in conflict with the law")),
                ("is_indigenous", models.BooleanField(default=False)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("Pending", "Pending"),
                            ("Approved", "Approved"),
                            ("Rejected", "Rejected"),
                            ("Archived", "Archived"),
                        ],
                        default="Pending",
                        max_length=20,
                    ),
                ),
                ("sk_id_number", models.CharField(blank=True, max_length=32, null=True, unique=True)),
                ("qr_code", models.CharField(blank=True, max_length=64, null=True)),
                ("id_printed", models.BooleanField(default=False)),
                ("id_printed_at", models.DateTimeField(blank=True, null=True)),
                ("points", models.PositiveIntegerField(default=0)),
                (
                    "groups",
                    models.ManyToManyField(
                        blank=True,
                        help_text="The groups this user belongs to. A user will get all permissions "
                        "granted to each of their groups.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.group",
                        verbose_name="groups",
                    ),
                ),
                (
                    "user_permissions",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Specific permissions for this user.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.permission",
                        verbose_name="user permissions",
                    ),
                ),
            ],
            options={
                "verbose_name": "user",
                "verbose_name_plural": "users",
                "abstract": False,
                "indexes": [models.Index(fields=["status"], name="user_status_idx")],
            },
            managers=[
                ("objects", django.contrib.auth.models.UserManager()),
            ],
        ),
    ]
