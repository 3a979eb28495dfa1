from rest_framework import serializers

from .models import Complaint

MIN_LOCATION_LENGTH = 5
MIN_DESCRIPTION_LENGTH = 20
MIN_NOTE_LENGTH = 5


class ComplaintCreateSerializer(serializers.Serializer):
    category = serializers.ChoiceField(
        choices=Complaint.Category.choices,
        error_messages={"required": "Please select a category"},
    )
    location = serializers.CharField(
        max_length=255,
        min_length=MIN_LOCATION_LENGTH,
        error_messages={"min_length": f"Location must be at least {MIN_LOCATION_LENGTH} characters"},
    )
    description = serializers.CharField(
        min_length=MIN_DESCRIPTION_LENGTH,
        error_messages={"min_length": f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters"},
    )


class StatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=Complaint.Status.choices,
        error_messages={"invalid_choice": "Invalid status"},
    )


class NoteCreateSerializer(serializers.Serializer):
    note = serializers.CharField(
        min_length=MIN_NOTE_LENGTH,
        error_messages={"min_length": f"Note must be at least {MIN_NOTE_LENGTH} characters"},
    )


class ComplaintSerializer(serializers.Serializer):
    """Read-only view of a complaint from either store."""

    id = serializers.UUIDField()
    human_id = serializers.CharField()
    citizen_id = serializers.CharField()
    category = serializers.CharField()
    location = serializers.CharField()
    description = serializers.CharField()
    status = serializers.CharField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class NoteSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    complaint_id = serializers.UUIDField()
    officer_id = serializers.CharField()
    officer_name = serializers.CharField()
    note = serializers.CharField()
    created_at = serializers.DateTimeField()
