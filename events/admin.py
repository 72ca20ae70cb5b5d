from django.contrib import admin
from .models import Event, EventRegistration, EventAttendance, ScanLog


class EventRegistrationInline(admin.TabularInline):
    model = EventRegistration
    extra = 0
    raw_id_fields = ('user',)
    readonly_fields = ('registered_at',)


class EventAttendanceInline(admin.TabularInline):
    model = EventAttendance
    fk_name = 'event'
    extra = 0
    raw_id_fields = ('user', 'scanned_by')
    readonly_fields = ('checked_in_at', 'was_pre_registered', 'points_awarded')


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ('event_id', 'title', 'status', 'category', 'event_date', 'points_reward')
    list_filter = ('status', 'category', 'event_date')
    search_fields = ('event_id', 'title', 'description', 'location')
    date_hierarchy = 'event_date'
    readonly_fields = ('event_id', 'qr_code')
    inlines = [EventRegistrationInline, EventAttendanceInline]

@admin.register(EventRegistration)
class EventRegistrationAdmin(admin.ModelAdmin):
    list_display = ('user', 'event', 'is_walk_in', 'registered_at')
    list_filter = ('is_walk_in',)
    search_fields = ('user__sk_id_number', 'user__email', 'event__event_id', 'event__title')

@admin.register(EventAttendance)
class EventAttendanceAdmin(admin.ModelAdmin):
    list_display = ('user', 'event', 'was_pre_registered', 'points_awarded', 'checked_in_at')
    list_filter = ('was_pre_registered', 'checked_in_at')
    search_fields = ('user__sk_id_number', 'event__event_id')

@admin.register(ScanLog)
class ScanLogAdmin(admin.ModelAdmin):
    list_display = ('scanned_by', 'action', 'event_code', 'person_code', 'created_at')
    list_filter = ('action', 'created_at')
    search_fields = ('scanned_by__username', 'event_code', 'person_code')
