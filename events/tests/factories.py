from datetime import time, timedelta

from django.utils import timezone

from events.models import Event
from users.models import User


def make_admin(username="sk_admin"):
    return User.objects.create_user(
        username=username,
        email=f"{username}@example.com",
        password="pass",
        role=User.ROLE_ADMIN,
    )


def make_youth(username, first_name="", last_name="", approved=True, **extra):
    user = User.objects.create_user(
        username=username,
        email=f"{username}@example.com",
        password="pass",
        first_name=first_name,
        last_name=last_name,
        role=User.ROLE_YOUTH,
        **extra,
    )
    if approved:
        user.approve()
        user.save()
    return user


def make_event(title="Youth Assembly", points_reward=10, status=Event.STATUS_PUBLISHED, days_ahead=7, **extra):
    return Event.objects.create(
        title=title,
        description="",
        event_date=timezone.now().date() + timedelta(days=days_ahead),
        start_time=time(9, 0),
        end_time=time(12, 0),
        location="Barangay Hall",
        venue="Session hall",
        category="Social",
        points_reward=points_reward,
        status=status,
        **extra,
    )
