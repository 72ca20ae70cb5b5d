from datetime import date, time, timedelta

from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model

from events.models import Event, EventRegistration

User = get_user_model()

YOUTH = [
    # email, first, last, sex, birthday, purok
    ("juan@example.com", "Juan", "Dela Cruz", "Male", date(2004, 3, 14), "Purok 1"),
    ("maria@example.com", "Maria", "Santos", "Female", date(2007, 8, 2), "Purok 3"),
    ("paolo@example.com", "Paolo", "Reyes", "Male", date(1999, 11, 21), "Purok 5"),
]


class Command(BaseCommand):
    help = "Seeds the database with an admin, approved youth members and sample events"

    def add_arguments(self, parser):
        parser.add_argument("--admin-password", default="admin")

    def handle(self, *args, **options):
        self.stdout.write("Seeding data...")

        admin, created = User.objects.get_or_create(
            username="admin",
            defaults={"email": "admin@example.com", "role": User.ROLE_ADMIN, "is_staff": True},
        )
        if created or not admin.check_password(options["admin_password"]):
            admin.set_password(options["admin_password"])
            admin.save()

        members = []
        for email, first, last, sex, birthday, purok in YOUTH:
            user, created = User.objects.get_or_create(
                username=email,
                defaults={
                    "email": email,
                    "first_name": first,
                    "last_name": last,
                    "sex": sex,
                    "birthday": birthday,
                    "purok": purok,
                    "civil_status": "Single",
                    "educational_background": "College Level",
                    "youth_classification": "In School Youth",
                    "work_status": "Unemployed",
                },
            )
            if created:
                user.set_password("password")
            if not user.sk_id_number:
                user.approve()
            user.save()
            members.append(user)
            self.stdout.write(f"Youth: {user.display_name} ({user.sk_id_number})")

        today = date.today()
        events_data = [
            {
                "title": "Barangay Basketball League Opener",
                "description": "Opening games of the inter-purok youth basketball league.",
                "event_date": today + timedelta(days=3),
                "start_time": time(14, 0),
                "end_time": time(17, 0),
                "location": "Barangay Covered Court",
                "venue": "Main court",
                "category": "Sports",
                "points_reward": 10,
            },
            {
                "title": "Coastal Clean-up Drive",
                "description": "Bring gloves and water. Sacks are provided.",
                "event_date": today + timedelta(days=10),
                "start_time": time(6, 0),
                "end_time": time(9, 0),
                "location": "Shoreline, Purok 7",
                "venue": "Meet at the chapel",
                "category": "Environmental",
                "points_reward": 15,
                "max_capacity": 50,
            },
        ]

        for data in events_data:
            event, created = Event.objects.get_or_create(
                title=data["title"],
                defaults={**data, "status": Event.STATUS_PUBLISHED, "created_by": admin},
            )
            self.stdout.write(f"Event: {event.event_id} {event.title} ({'created' if created else 'exists'})")

        first_event = Event.objects.filter(title=events_data[0]["title"]).first()
        if first_event:
            for user in members[:2]:
                EventRegistration.objects.get_or_create(event=first_event, user=user)

        self.stdout.write(self.style.SUCCESS("Done."))
