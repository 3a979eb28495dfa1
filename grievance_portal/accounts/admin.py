from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("username", "name", "email", "role", "department", "is_staff")
    list_filter = ("role", "department", "is_staff", "is_active")
    search_fields = ("username", "name", "email", "phone")
    fieldsets = BaseUserAdmin.fieldsets + (
        ("Portal", {"fields": ("name", "phone", "address", "role", "department")}),
    )
