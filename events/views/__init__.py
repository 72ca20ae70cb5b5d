from .events import (
    EventListCreateView,
    PublicEventDetailView,
    AdminEventListView,
    AdminEventDetailView,
    EventPublishView,
    EventStatusView,
    EventQRImageView,
)
from .registrations import (
    RegisterEventView,
    UnregisterEventView,
    MyEventsView,
)
from .scan import MarkAttendanceView, UserAttendanceHistoryView
from .generics import api_error
