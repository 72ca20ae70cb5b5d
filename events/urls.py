from django.urls import path
from .views import (
    EventListCreateView,
    PublicEventDetailView,
    AdminEventListView,
    AdminEventDetailView,
    EventPublishView,
    EventStatusView,
    EventQRImageView,
    RegisterEventView,
    UnregisterEventView,
    MyEventsView,
    MarkAttendanceView,
    UserAttendanceHistoryView,
)

urlpatterns = [
    path("", EventListCreateView.as_view(), name="event-list"),

    # Admin
    path("admin/all/", AdminEventListView.as_view(), name="admin-event-list"),
    path("admin/<int:pk>/", AdminEventDetailView.as_view(), name="admin-event-detail"),
    path("admin/<int:pk>/publish/", EventPublishView.as_view(), name="admin-event-publish"),
    path("admin/<int:pk>/status/", EventStatusView.as_view(), name="admin-event-status"),
    path("admin/<int:pk>/qr/", EventQRImageView.as_view(), name="admin-event-qr"),

    # QR scan
    path("attendance/", MarkAttendanceView.as_view(), name="attendance-mark"),
    path(
        "user/<int:user_id>/attendance/",
        UserAttendanceHistoryView.as_view(),
        name="user-attendance-history",
    ),

    # Youth
    path("user/my-events/", MyEventsView.as_view(), name="my-events"),
    path("<int:pk>/", PublicEventDetailView.as_view(), name="event-detail"),
    path("<int:pk>/register/", RegisterEventView.as_view(), name="event-register"),
    path("<int:pk>/unregister/", UnregisterEventView.as_view(), name="event-unregister"),
]
