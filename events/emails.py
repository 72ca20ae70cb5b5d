# events/emails.py
from django.core.mail import send_mail
from django.conf import settings


def send_registration_email(registration):
    """
    Send a simple registration confirmation email
    to the youth member.
    """
    user = registration.user
    event = registration.event

    if not getattr(user, "email", None):
        # No email set, nothing to send
        return

    subject = f"Registered for {event.title}"

    message = (
        f"Hi {user.first_name or user.username},\n\n"
        f"You have successfully registered for the event:\n"
        f"  {event.title} ({event.event_id})\n"
        f"  Where: {event.location}, {event.venue}\n"
        f"  When: {event.event_date:%B %d, %Y} {event.start_time:%I:%M %p} - {event.end_time:%I:%M %p}\n\n"
        f"Bring your SK ID and have its QR code scanned at the venue to earn "
        f"{event.points_reward} points.\n\n"
        f"Thank you,\n"
        f"Sangguniang Kabataan"
    )

    send_mail(
        subject=subject,
        message=message,
        from_email=getattr(settings, "DEFAULT_FROM_EMAIL", None),
        recipient_list=[user.email],
        fail_silently=True,
    )
