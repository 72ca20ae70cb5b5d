import logging

from django.db import transaction
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from events.emails import send_registration_email
from events.models import Event, EventAttendance, EventRegistration
from events.serializers import RegistrationSerializer
from events.state_machine import validate_action_for_status
from .generics import api_error

logger = logging.getLogger('sk.events')


class RegisterEventView(APIView):
    """
    POST /api/events/<pk>/register/
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, pk):
        # Check if already registered (outside transaction for fast fail)
        if EventRegistration.objects.filter(event_id=pk, user=request.user).exists():
            return api_error("Already registered for this event", status.HTTP_400_BAD_REQUEST)

        try:
            with transaction.atomic():
                # Lock the event row to prevent overbooking
                event = Event.objects.select_for_update().get(pk=pk)

                allowed, reason = validate_action_for_status(event, "register")
                if not allowed:
                    return api_error(reason, status.HTTP_403_FORBIDDEN)

                # Re-check registration inside transaction
                if EventRegistration.objects.filter(event=event, user=request.user).exists():
                    return api_error("Already registered for this event", status.HTTP_400_BAD_REQUEST)

                if event.max_capacity and event.registrations.count() >= event.max_capacity:
                    logger.warning(f"Registration failed: capacity reached for event {event.event_id}")
                    return api_error("Event is at full capacity", status.HTTP_400_BAD_REQUEST)

                reg = EventRegistration.objects.create(event=event, user=request.user)

                logger.info(f"Registration created: user={request.user.id}, event={event.event_id}")

        except Event.DoesNotExist:
            return api_error("Event not found", status.HTTP_404_NOT_FOUND)

        # Send email outside transaction (non-critical)
        send_registration_email(reg)

        return Response(
            {
                "message": "Successfully registered for event",
                "registration": RegistrationSerializer(reg).data,
            },
            status=status.HTTP_201_CREATED,
        )


class UnregisterEventView(APIView):
    """
    POST /api/events/<pk>/unregister/
    """
    permission_classes = [IsAuthenticated]

    def post(self, request, pk):
        try:
            with transaction.atomic():
                # Serializes with attendance scanning of this event
                event = Event.objects.select_for_update().get(pk=pk)

                allowed, reason = validate_action_for_status(event, "unregister")
                if not allowed:
                    return api_error(reason, status.HTTP_403_FORBIDDEN)

                try:
                    reg = EventRegistration.objects.get(event=event, user=request.user)
                except EventRegistration.DoesNotExist:
                    return api_error("Not registered for this event", status.HTTP_400_BAD_REQUEST)

                # Attendees stay registered
                if EventAttendance.objects.filter(event=event, user=request.user).exists():
                    return api_error("Attendance already recorded; registration can no longer be withdrawn",
                                     status.HTTP_400_BAD_REQUEST)

                reg.delete()
        except Event.DoesNotExist:
            return api_error("Event not found", status.HTTP_404_NOT_FOUND)

        logger.info(f"Registration withdrawn: user={request.user.id}, event={event.event_id}")

        return Response({"message": "Successfully unregistered from event"})


class MyEventsView(APIView):
    """
    GET /api/events/user/my-events/  -> published events the caller registered for
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        regs = (
            EventRegistration.objects
            .filter(user=request.user, event__status=Event.STATUS_PUBLISHED)
            .select_related("event")
            .order_by("event__event_date")
        )
        attendance = dict(
            EventAttendance.objects.filter(user=request.user).values_list("event", "points_awarded")
        )

        results = []
        for reg in regs:
            event = reg.event
            has_attended = event.pk in attendance
            results.append({
                "id": event.pk,
                "event_id": event.event_id,
                "title": event.title,
                "event_date": event.event_date,
                "start_time": event.start_time,
                "location": event.location,
                "poster_image": event.poster_image,
                "points_reward": event.points_reward,
                "has_attended": has_attended,
                "points_earned": attendance.get(event.pk, 0),
            })

        return Response(results)
