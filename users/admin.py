from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .models import User

@admin.register(User)
class CustomUserAdmin(UserAdmin):
    list_display = ('username', 'email', 'sk_id_number', 'first_name', 'last_name', 'purok', 'status', 'points')
    list_filter = ('role', 'status', 'purok', 'is_staff', 'id_printed')
    search_fields = ('username', 'email', 'first_name', 'last_name', 'sk_id_number')
    readonly_fields = ('sk_id_number', 'qr_code', 'points')
    fieldsets = UserAdmin.fieldsets + (
        ('Youth Profile', {'fields': (
            'role', 'middle_name', 'suffix', 'sex', 'birthday', 'contact_number', 'purok', 'street',
            'civil_status', 'educational_background', 'youth_classification', 'work_status',
        )}),
        ('Registry', {'fields': ('status', 'sk_id_number', 'qr_code', 'id_printed', 'id_printed_at', 'points')}),
    )
    add_fieldsets = UserAdmin.add_fieldsets + (
        ('Youth Profile', {'fields': ('role', 'email', 'first_name', 'last_name')}),
    )
