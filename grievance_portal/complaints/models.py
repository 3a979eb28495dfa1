import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone


class Complaint(models.Model):
    class Category(models.TextChoices):
        ELECTRICITY = "electricity", "Electricity"
        WATER = "water", "Water"
        ROADS = "roads", "Roads"
        WASTE = "waste", "Waste"
        OTHER = "other", "Other"

    class Status(models.TextChoices):
        SUBMITTED = "submitted", "Submitted"
        IN_PROGRESS = "in_progress", "In Progress"
        RESOLVED = "resolved", "Resolved"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    human_id = models.CharField(max_length=24, unique=True, editable=False)
    sequence = models.PositiveIntegerField(db_index=True, editable=False)
    citizen = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="complaints",
    )
    category = models.CharField(max_length=20, choices=Category.choices)
    location = models.CharField(max_length=255)
    description = models.TextField()
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.SUBMITTED,
    )
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["citizen", "-created_at"], name="complaint_citizen_created_idx"),
            models.Index(fields=["category", "-created_at"], name="complaint_category_created_idx"),
        ]

    def __str__(self):
        return self.human_id

    def can_be_viewed_by(self, user) -> bool:
        return user.is_officer or self.citizen_id == user.id


class ComplaintNote(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    complaint = models.ForeignKey(
        Complaint,
        on_delete=models.CASCADE,
        related_name="notes",
    )
    officer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="complaint_notes",
    )
    officer_name = models.CharField(max_length=150)
    note = models.TextField()
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.officer_name} - {self.complaint_id}"
