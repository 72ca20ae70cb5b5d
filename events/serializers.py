from django.conf import settings
from rest_framework import serializers

from users.serializers import PersonSummarySerializer
from .models import Event, EventRegistration
from .state_machine import can_transition


# -----------------------------------------
# EVENT SERIALIZER (admin create / update)
# -----------------------------------------
class EventSerializer(serializers.ModelSerializer):
    created_by_name = serializers.CharField(source="created_by.username", read_only=True, default=None)
    registered_count = serializers.SerializerMethodField()
    attendees_count = serializers.SerializerMethodField()
    points_reward = serializers.IntegerField(min_value=0, required=False)
    max_capacity = serializers.IntegerField(min_value=1, required=False, allow_null=True)

    class Meta:
        model = Event
        fields = [
            "id",
            "event_id",
            "qr_code",
            "title",
            "description",
            "event_date",
            "start_time",
            "end_time",
            "location",
            "venue",
            "category",
            "poster_image",
            "points_reward",
            "max_capacity",
            "status",
            "created_by",
            "created_by_name",
            "registered_count",
            "attendees_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "event_id",
            "qr_code",
            "created_by",
            "created_at",
            "updated_at",
        ]

    def get_registered_count(self, obj):
        annotated = getattr(obj, "_registered_count", None)
        return annotated if annotated is not None else obj.registered_count

    def get_attendees_count(self, obj):
        annotated = getattr(obj, "_attendees_count", None)
        return annotated if annotated is not None else obj.attendees_count

    def validate(self, attrs):
        start = attrs.get("start_time", getattr(self.instance, "start_time", None))
        end = attrs.get("end_time", getattr(self.instance, "end_time", None))
        if start and end and end <= start:
            raise serializers.ValidationError({"end_time": "End time must be after start time."})

        new_status = attrs.get("status")
        if self.instance is None:
            # New events may start as Draft or go straight to Published
            if new_status and new_status not in (Event.STATUS_DRAFT, Event.STATUS_PUBLISHED):
                raise serializers.ValidationError({"status": "New events must be Draft or Published."})
        elif new_status:
            ok, reason = can_transition(self.instance, new_status)
            if not ok:
                raise serializers.ValidationError({"status": reason})
        return attrs

    def create(self, validated_data):
        if validated_data.get("points_reward") is None:
            validated_data["points_reward"] = settings.DEFAULT_EVENT_POINTS
        return super().create(validated_data)


class EventDetailAdminSerializer(EventSerializer):
    registered = serializers.SerializerMethodField()
    attendees = PersonSummarySerializer(many=True, read_only=True)

    class Meta(EventSerializer.Meta):
        fields = EventSerializer.Meta.fields + ["registered", "attendees"]

    def get_registered(self, obj):
        rows = obj.registrations.select_related("user").order_by("registered_at")
        return [
            {
                **PersonSummarySerializer(row.user).data,
                "registered_at": row.registered_at,
                "is_walk_in": row.is_walk_in,
            }
            for row in rows
        ]


# -----------------------------------------
# PUBLIC EVENT SERIALIZER (youth view)
# -----------------------------------------
class PublicEventSerializer(serializers.ModelSerializer):
    registered = serializers.SerializerMethodField()
    is_registered = serializers.SerializerMethodField()

    class Meta:
        model = Event
        fields = [
            "id",
            "event_id",
            "title",
            "description",
            "event_date",
            "start_time",
            "end_time",
            "location",
            "venue",
            "category",
            "poster_image",
            "points_reward",
            "max_capacity",
            "registered",
            "is_registered",
        ]

    def get_registered(self, obj):
        annotated = getattr(obj, "_registered_count", None)
        return annotated if annotated is not None else obj.registered_count

    def get_is_registered(self, obj):
        request = self.context.get("request")
        user = getattr(request, "user", None)
        if not user or not user.is_authenticated:
            return False
        registered_ids = self.context.get("registered_event_ids")
        if registered_ids is not None:
            return obj.pk in registered_ids
        return obj.registrations.filter(user=user).exists()


class RegistrationSerializer(serializers.ModelSerializer):
    event_id = serializers.CharField(source="event.event_id", read_only=True)
    title = serializers.CharField(source="event.title", read_only=True)

    class Meta:
        model = EventRegistration
        fields = ["id", "event", "event_id", "title", "registered_at", "is_walk_in"]
        read_only_fields = fields


# -----------------------------------------
# ATTENDANCE
# -----------------------------------------
class MarkAttendanceSerializer(serializers.Serializer):
    event_id = serializers.CharField(max_length=64, trim_whitespace=True)
    sk_id_number = serializers.CharField(max_length=128, trim_whitespace=True)


class AttendanceHistorySerializer(serializers.Serializer):
    event_id = serializers.CharField()
    title = serializers.CharField()
    event_date = serializers.DateField()
    location = serializers.CharField()
    category = serializers.CharField()
    points_reward = serializers.IntegerField()
    attended = serializers.BooleanField()
    registered_at = serializers.DateTimeField(allow_null=True)


class StatusTransitionSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Event.STATUS_CHOICES)
