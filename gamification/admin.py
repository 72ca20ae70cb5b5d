from django.contrib import admin
from .models import PointsLedgerEntry

@admin.register(PointsLedgerEntry)
class PointsLedgerEntryAdmin(admin.ModelAdmin):
    list_display = ('user', 'amount', 'reason', 'event', 'balance_after', 'created_at')
    list_filter = ('reason', 'created_at')
    search_fields = ('user__sk_id_number', 'user__email', 'event__event_id')
