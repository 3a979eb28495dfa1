from django.contrib.auth.models import AbstractUser
from django.db import models

from complaints.models import Complaint


class User(AbstractUser):
    class Role(models.TextChoices):
        CITIZEN = "citizen", "Citizen"
        OFFICER = "officer", "Officer"

    name = models.CharField(max_length=150, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    address = models.CharField(max_length=255, blank=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.CITIZEN)
    department = models.CharField(
        max_length=20,
        choices=Complaint.Category.choices,
        blank=True,
        null=True,
    )

    @property
    def is_officer(self) -> bool:
        return self.role == self.Role.OFFICER

    @property
    def display_name(self) -> str:
        return self.name or self.get_username()
