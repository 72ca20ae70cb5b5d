from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from events.attendance import AttendanceOutcome, attendance_history, mark_attendance
from events.permissions import IsRegistryAdmin
from events.serializers import AttendanceHistorySerializer, MarkAttendanceSerializer
from .generics import api_error, client_ip

User = get_user_model()


class MarkAttendanceView(APIView):
    """
    POST /api/events/attendance/
    Body: {"event_id": "EVT-2026-AB12CD34", "sk_id_number": "SK-2026-3F2A9C1B"}

    200 -> recorded (full points if pre-registered, half for walk-ins)
    409 -> already recorded / event not open for scanning
    404 -> unknown event or SK ID
    """

    permission_classes = [IsAuthenticated, IsRegistryAdmin]
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "qr-scan"

    def post(self, request):
        serializer = MarkAttendanceSerializer(data=request.data)
        if not serializer.is_valid():
            return api_error("Event ID and SK ID are required", status.HTTP_400_BAD_REQUEST,
                             details=serializer.errors)

        outcome = mark_attendance(
            serializer.validated_data["event_id"],
            serializer.validated_data["sk_id_number"],
            scanned_by=request.user,
            ip_address=client_ip(request),
        )

        user_data = {"name": outcome.person_name, "sk_id_number": outcome.sk_id_number}

        if outcome.ok:
            return Response({
                "success": True,
                "message": outcome.message,
                "was_pre_registered": outcome.was_pre_registered,
                "points_awarded": outcome.points_awarded,
                "total_points": outcome.total_points,
                "user": user_data,
            }, status=status.HTTP_200_OK)

        if outcome.is_duplicate:
            return Response({
                "duplicate": True,
                "already_recorded": True,
                "message": outcome.message,
                "user": user_data,
            }, status=status.HTTP_409_CONFLICT)

        if outcome.kind == AttendanceOutcome.EVENT_NOT_FOUND:
            return api_error(outcome.message, status.HTTP_404_NOT_FOUND, not_found="event")

        if outcome.kind == AttendanceOutcome.PERSON_NOT_FOUND:
            return api_error(outcome.message, status.HTTP_404_NOT_FOUND, not_found="person")

        return api_error(outcome.message, status.HTTP_409_CONFLICT, event_closed=True, user=user_data)


class UserAttendanceHistoryView(APIView):
    """
    GET /api/events/user/<user_id>/attendance/  -> admin view of one member's events
    """
    permission_classes = [IsAuthenticated, IsRegistryAdmin]

    def get(self, request, user_id):
        person = get_object_or_404(User, pk=user_id)
        rows = attendance_history(person)
        return Response(AttendanceHistorySerializer(rows, many=True).data)
