import logging

from django.db import transaction
from django.db.models import Count, Q
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from core.qr import qr_png_response
from events.models import Event, EventRegistration
from events.permissions import IsRegistryAdmin, IsRegistryAdminOrReadOnly
from events.serializers import EventSerializer, EventDetailAdminSerializer, PublicEventSerializer, StatusTransitionSerializer
from events.state_machine import transition, validate_action_for_status
from .generics import api_error

logger = logging.getLogger('sk.events')


def with_member_counts(qs):
    return qs.annotate(
        _registered_count=Count("registrations", distinct=True),
        _attendees_count=Count("attendances", distinct=True),
    )


class EventListCreateView(APIView):
    """
    GET  /api/events/   -> upcoming published events (anyone; `is_registered` when logged in)
    POST /api/events/   -> create event (admin), Draft unless told otherwise
    """
    permission_classes = [IsRegistryAdminOrReadOnly]

    def get(self, request):
        today = timezone.now().date()
        qs = Event.objects.filter(status=Event.STATUS_PUBLISHED, event_date__gte=today)

        category = request.query_params.get("category")
        if category:
            qs = qs.filter(category=category)

        search = request.query_params.get("search")
        if search:
            qs = qs.filter(
                Q(title__icontains=search) |
                Q(description__icontains=search) |
                Q(location__icontains=search)
            )

        qs = with_member_counts(qs).order_by("event_date", "start_time")

        registered_ids = None
        if request.user.is_authenticated:
            registered_ids = set(
                EventRegistration.objects.filter(user=request.user).values_list("event", flat=True)
            )

        serializer = PublicEventSerializer(
            qs,
            many=True,
            context={"request": request, "registered_event_ids": registered_ids},
        )
        return Response(serializer.data)

    def post(self, request):
        serializer = EventSerializer(data=request.data, context={"request": request})
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        event = serializer.save(created_by=request.user)
        logger.info(f"Event created: event={event.event_id}, status={event.status}, by={request.user.id}")

        return Response(
            {
                "message": "Event created successfully",
                "event_id": event.event_id,
                "event": EventSerializer(event).data,
            },
            status=status.HTTP_201_CREATED,
        )


class PublicEventDetailView(APIView):
    """
    GET /api/events/<pk>/  -> published event details (anyone)
    """
    permission_classes = []

    def get(self, request, pk):
        event = get_object_or_404(with_member_counts(Event.objects.all()), pk=pk)
        if event.status != Event.STATUS_PUBLISHED:
            return api_error("Event not available", status.HTTP_403_FORBIDDEN)
        return Response(PublicEventSerializer(event, context={"request": request}).data)


class AdminEventListView(APIView):
    """
    GET /api/events/admin/all/?status=Draft  -> every event with member counts
    """
    permission_classes = [IsAuthenticated, IsRegistryAdmin]

    def get(self, request):
        qs = Event.objects.select_related("created_by")

        status_param = request.query_params.get("status")
        if status_param:
            qs = qs.filter(status=status_param)

        qs = with_member_counts(qs).order_by("-event_date", "-start_time")
        return Response(EventSerializer(qs, many=True).data)


class AdminEventDetailView(APIView):
    """
    GET    /api/events/admin/<pk>/  -> event with registered / attendee lists
    PUT    /api/events/admin/<pk>/  -> update (status changes go through the state machine)
    PATCH  /api/events/admin/<pk>/
    DELETE /api/events/admin/<pk>/
    """
    permission_classes = [IsAuthenticated, IsRegistryAdmin]

    def get(self, request, pk):
        event = get_object_or_404(Event.objects.select_related("created_by"), pk=pk)
        return Response(EventDetailAdminSerializer(event).data)

    def put(self, request, pk):
        return self._update(request, pk, partial=False)

    def patch(self, request, pk):
        return self._update(request, pk, partial=True)

    def _update(self, request, pk, partial):
        event = get_object_or_404(Event, pk=pk)

        allowed, reason = validate_action_for_status(event, "edit")
        if not allowed:
            return api_error(reason, status.HTTP_400_BAD_REQUEST)

        serializer = EventSerializer(event, data=request.data, partial=partial)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        new_status = serializer.validated_data.pop("status", None)

        with transaction.atomic():
            event = serializer.save()

            if new_status:
                ok, message = transition(event, new_status, actor=request.user)
                if not ok:
                    transaction.set_rollback(True)
                    return api_error(message, status.HTTP_400_BAD_REQUEST)

        return Response({"message": "Event updated successfully", "event": EventSerializer(event).data})

    def delete(self, request, pk):
        event = get_object_or_404(Event, pk=pk)
        deleted = EventSerializer(event).data
        event.delete()
        logger.info(f"Event deleted: event={deleted['event_id']}, by={request.user.id}")
        return Response({"message": "Event deleted successfully", "deleted_event": deleted})


class EventStatusView(APIView):
    """
    POST /api/events/admin/<pk>/status/  body: {"status": "Cancelled"}
    """
    permission_classes = [IsAuthenticated, IsRegistryAdmin]

    def post(self, request, pk):
        event = get_object_or_404(Event, pk=pk)
        serializer = StatusTransitionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return self._apply(request, event, serializer.validated_data["status"])

    def _apply(self, request, event, new_status):
        ok, message = transition(event, new_status, actor=request.user)
        if not ok:
            return api_error(message, status.HTTP_400_BAD_REQUEST)
        return Response({"message": message, "event": EventSerializer(event).data})


class EventPublishView(EventStatusView):
    """
    PUT/POST /api/events/admin/<pk>/publish/  -> Draft to Published
    """

    def post(self, request, pk):
        event = get_object_or_404(Event, pk=pk)
        return self._apply(request, event, Event.STATUS_PUBLISHED)

    def put(self, request, pk):
        return self.post(request, pk)


class EventQRImageView(APIView):
    """
    GET /api/events/admin/<pk>/qr/  -> PNG QR carrying the event code
    """
    permission_classes = [IsAuthenticated, IsRegistryAdmin]
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "qr-image"

    def get(self, request, pk):
        event = get_object_or_404(Event, pk=pk)
        return qr_png_response(event.qr_code or event.event_id)
