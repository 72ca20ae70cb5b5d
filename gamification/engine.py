import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import F

from .models import PointsLedgerEntry

logger = logging.getLogger('sk.gamification')


def reward_for_attendance(base_points: int, was_pre_registered: bool) -> int:
    """
    Points for one attendance: the full reward for people who registered
    ahead, half (floored) for walk-ins. A 1-point event gives walk-ins 0.
    """
    if was_pre_registered:
        return base_points
    return base_points // 2


class PointsEngine:

    @classmethod
    def credit(cls, user, amount: int, reason: str, event=None) -> int:
        """
        Add `amount` to the user's running total and log the ledger entry.
        Returns the new total; `user.points` is refreshed in place.
        """
        if amount < 0:
            raise ValueError("Points can only be credited, not deducted")

        User = get_user_model()

        with transaction.atomic():
            # Increment in the database so concurrent credits do not overwrite each other
            User.objects.filter(pk=user.pk).update(points=F("points") + amount)
            user.refresh_from_db(fields=["points"])

            PointsLedgerEntry.objects.create(
                user=user,
                event=event,
                amount=amount,
                reason=reason,
                balance_after=user.points,
            )

        logger.info(
            f"Points credited: user={user.pk}, amount={amount}, reason={reason}, "
            f"event={getattr(event, 'event_id', None)}, total={user.points}"
        )
        return user.points
