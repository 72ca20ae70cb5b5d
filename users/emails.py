# users/emails.py
import logging

from django.core.mail import send_mail
from django.conf import settings

logger = logging.getLogger('sk.users')


def send_approval_email(user):
    """
    Tell a youth member their profile was approved and which SK ID was issued.
    """
    if not getattr(user, "email", None):
        # No email set, nothing to send
        return

    subject = "Your SK profile has been approved"
    message = (
        f"Hi {user.first_name or user.username},\n\n"
        f"Your youth registry profile has been approved.\n"
        f"  SK ID Number: {user.sk_id_number}\n\n"
        f"Present the QR code on your ID when attending events to earn points.\n\n"
        f"Thank you,\n"
        f"Sangguniang Kabataan"
    )

    sent = send_mail(
        subject=subject,
        message=message,
        from_email=getattr(settings, "DEFAULT_FROM_EMAIL", None),
        recipient_list=[user.email],
        fail_silently=True,
    )
    if not sent:
        logger.warning(f"Approval email to user={user.id} was not delivered")
