# users/views.py - Youth registry profiles

import logging

from django.contrib.auth import get_user_model
from django.db.models import Q
from django.utils import timezone
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.qr import qr_png_response
from events.permissions import IsRegistryAdmin
from events.views.generics import api_error
from .emails import send_approval_email
from .serializers import UserSerializer, UpdateProfileSerializer

User = get_user_model()
logger = logging.getLogger('sk.users')


class MeProfileView(APIView):
    """
    GET   /api/users/me/  -> full profile of the logged-in youth member
    PATCH /api/users/me/  -> self-service edit (status, ID and points are read-only)
    """
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(UserSerializer(request.user).data)

    def patch(self, request):
        serializer = UpdateProfileSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(UserSerializer(user).data)


class AdminUserViewSet(mixins.ListModelMixin,
                       mixins.RetrieveModelMixin,
                       mixins.UpdateModelMixin,
                       viewsets.GenericViewSet):
    """
    Registry review for admins.

    GET   /api/users/admin/?status=Pending&purok=Purok 1&search=...
    GET   /api/users/admin/pending/
    PATCH /api/users/admin/{pk}/
    POST  /api/users/admin/{pk}/approve/
    POST  /api/users/admin/{pk}/reject/
    POST  /api/users/admin/{pk}/mark-printed/
    POST  /api/users/admin/{pk}/reset-print/
    GET   /api/users/admin/{pk}/qr/
    """
    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated, IsRegistryAdmin]

    def get_queryset(self):
        qs = User.objects.filter(role=User.ROLE_YOUTH).order_by('-date_joined')

        status_param = self.request.query_params.get('status')
        if status_param:
            qs = qs.filter(status=status_param)

        purok = self.request.query_params.get('purok')
        if purok:
            qs = qs.filter(purok=purok)

        search = self.request.query_params.get('search')
        if search:
            qs = qs.filter(
                Q(first_name__icontains=search) |
                Q(last_name__icontains=search) |
                Q(email__icontains=search) |
                Q(sk_id_number__icontains=search)
            )
        return qs

    @action(detail=False, methods=['get'])
    def pending(self, request):
        qs = User.objects.filter(role=User.ROLE_YOUTH, status=User.STATUS_PENDING).order_by('date_joined')
        return Response(self.get_serializer(qs, many=True).data)

    @action(detail=True, methods=['post', 'put'])
    def approve(self, request, pk=None):
        user = self.get_object()
        if user.status == User.STATUS_ARCHIVED:
            return api_error("Archived profiles cannot be approved.", status.HTTP_400_BAD_REQUEST)

        sk_id_number = user.approve()
        user.save(update_fields=['status', 'sk_id_number', 'qr_code'])
        logger.info(f"User approved: user={user.id}, sk_id={sk_id_number}, by={request.user.id}")

        send_approval_email(user)

        return Response({
            "message": "User Approved!",
            "sk_id_number": sk_id_number,
            "user": self.get_serializer(user).data,
        })

    @action(detail=True, methods=['post', 'put'])
    def reject(self, request, pk=None):
        user = self.get_object()
        user.status = User.STATUS_REJECTED
        user.save(update_fields=['status'])
        logger.info(f"User rejected: user={user.id}, by={request.user.id}")
        return Response({
            "message": "User rejected successfully",
            "user": self.get_serializer(user).data,
        })

    @action(detail=True, methods=['post'], url_path='mark-printed')
    def mark_printed(self, request, pk=None):
        user = self.get_object()
        if not user.sk_id_number:
            return api_error("User has no SK ID to print yet.", status.HTTP_400_BAD_REQUEST)

        user.id_printed = True
        user.id_printed_at = timezone.now()
        user.save(update_fields=['id_printed', 'id_printed_at'])
        return Response({"message": "ID marked as printed", "user": self.get_serializer(user).data})

    @action(detail=True, methods=['post'], url_path='reset-print')
    def reset_print(self, request, pk=None):
        user = self.get_object()
        user.id_printed = False
        user.id_printed_at = None
        user.save(update_fields=['id_printed', 'id_printed_at'])
        return Response({"message": "Print status reset", "user": self.get_serializer(user).data})

    @action(detail=True, methods=['get'])
    def qr(self, request, pk=None):
        """PNG of the QR printed on the youth ID (encodes the SK ID number)."""
        user = self.get_object()
        if not user.sk_id_number:
            return api_error("User has no SK ID yet.", status.HTTP_404_NOT_FOUND)
        return qr_png_response(user.sk_id_number)

    def get_throttles(self):
        if self.action == 'qr':
            self.throttle_scope = 'qr-image'
        return super().get_throttles()
