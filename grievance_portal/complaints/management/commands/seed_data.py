from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from complaints.models import Complaint
from complaints.stores import get_storage

User = get_user_model()


class Command(BaseCommand):
    help = "Seed the database with sample citizen/officer accounts and complaints."

    def handle(self, *args, **options):
        officer, created_officer = User.objects.get_or_create(
            username="roads_officer",
            defaults={
                "email": "roads_officer@example.com",
                "name": "Roads Officer",
                "phone": "0000000000",
                "address": "Public Works Office",
                "role": User.Role.OFFICER,
                "department": Complaint.Category.ROADS,
            },
        )
        if created_officer:
            officer.set_password("OfficerPass123!")
            officer.save()

        citizen, created_citizen = User.objects.get_or_create(
            username="citizen_user",
            defaults={
                "email": "citizen_user@example.com",
                "name": "Citizen User",
                "phone": "1111111111",
                "address": "12 Market Street",
            },
        )
        if created_citizen:
            citizen.set_password("CitizenPass123!")
            citizen.save()

        sample_definitions = [
            {
                "category": Complaint.Category.ROADS,
                "location": "Ring Road Block A",
                "description": "Large potholes causing traffic congestion and accidents near the junction.",
                "status": Complaint.Status.IN_PROGRESS,
            },
            {
                "category": Complaint.Category.WASTE,
                "location": "Zone 2 - Main Street",
                "description": "Municipal bins are not being cleared regularly in Zone 2.",
                "status": Complaint.Status.SUBMITTED,
            },
            {
                "category": Complaint.Category.ELECTRICITY,
                "location": "Public Park Road",
                "description": "Streetlights remain off at night near the public park.",
                "status": Complaint.Status.RESOLVED,
            },
        ]

        storage = get_storage()
        existing = {c.description for c in storage.complaints.list_by_citizen(citizen.id)}
        created_count = 0
        for item in sample_definitions:
            if item["description"] in existing:
                continue
            complaint = storage.complaints.create(
                category=item["category"],
                location=item["location"],
                description=item["description"],
                citizen_id=citizen.id,
            )
            created_count += 1
            if item["status"] != Complaint.Status.SUBMITTED:
                storage.complaints.update_status(complaint.id, item["status"])
                storage.notes.create(
                    complaint_id=complaint.id,
                    officer_id=officer.id,
                    officer_name=officer.display_name,
                    text="Complaint has been reviewed by the department.",
                )

        self.stdout.write(self.style.SUCCESS("Seed complete."))
        self.stdout.write(
            self.style.WARNING(
                "Credentials: citizen_user / CitizenPass123!, "
                "roads_officer / OfficerPass123!"
            )
        )
        self.stdout.write(self.style.SUCCESS(f"New complaints created: {created_count}"))
