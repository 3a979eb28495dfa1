from django.contrib import admin

from .models import Complaint, ComplaintNote


class ComplaintNoteInline(admin.TabularInline):
    model = ComplaintNote
    extra = 0
    readonly_fields = ("officer", "officer_name", "note", "created_at")
    can_delete = False


@admin.register(Complaint)
class ComplaintAdmin(admin.ModelAdmin):
    list_display = (
        "human_id",
        "category",
        "status",
        "citizen",
        "location",
        "created_at",
        "updated_at",
    )
    list_filter = ("status", "category", "created_at")
    search_fields = ("human_id", "citizen__username", "location", "description")
    readonly_fields = (
        "human_id",
        "sequence",
        "citizen",
        "category",
        "location",
        "description",
        "created_at",
        "updated_at",
    )
    inlines = [ComplaintNoteInline]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(ComplaintNote)
class ComplaintNoteAdmin(admin.ModelAdmin):
    list_display = ("id", "complaint", "officer_name", "created_at")
    search_fields = ("complaint__human_id", "officer_name", "note")
    readonly_fields = ("complaint", "officer", "officer_name", "note", "created_at")
