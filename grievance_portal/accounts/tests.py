from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

User = get_user_model()


class AccountApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.citizen_payload = {
            "username": "newcitizen",
            "password": "Secret123",
            "name": "Asha Verma",
            "email": "asha@example.com",
            "phone": "9876543210",
            "address": "12 Market Street",
        }

    def test_register_citizen_logs_in(self):
        response = self.client.post(reverse("accounts:register"), self.citizen_payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["role"], "citizen")
        self.assertIsNone(response.data["department"])
        self.assertNotIn("password", response.data)

        me = self.client.get(reverse("accounts:current_user"))
        self.assertEqual(me.status_code, status.HTTP_200_OK)
        self.assertEqual(me.data["username"], "newcitizen")

    def test_citizen_registration_ignores_department(self):
        payload = dict(self.citizen_payload, department="water")
        response = self.client.post(reverse("accounts:register"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIsNone(User.objects.get(username="newcitizen").department)

    def test_register_officer_requires_department(self):
        payload = dict(self.citizen_payload, role="officer")
        response = self.client.post(reverse("accounts:register"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("department", response.data)

        payload["department"] = "water"
        response = self.client.post(reverse("accounts:register"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        officer = User.objects.get(username="newcitizen")
        self.assertTrue(officer.is_officer)
        self.assertEqual(officer.department, "water")

    def test_register_validates_fields(self):
        payload = dict(self.citizen_payload, username="ab", password="123", phone="12345", email="not-an-email")
        response = self.client.post(reverse("accounts:register"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["username"], ["Username must be at least 3 characters"])
        self.assertEqual(response.data["password"], ["Password must be at least 6 characters"])
        self.assertEqual(response.data["phone"], ["Phone number must be at least 10 digits"])
        self.assertEqual(response.data["email"], ["Invalid email address"])

    def test_duplicate_username_rejected(self):
        User.objects.create_user(username="newcitizen", password="Secret123")
        response = self.client.post(reverse("accounts:register"), self.citizen_payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["username"], ["Username already exists"])

    def test_login_and_logout(self):
        User.objects.create_user(username="citizen", password="StrongPass123!")
        failed = self.client.post(
            reverse("accounts:login"),
            {"username": "citizen", "password": "wrong-password"},
            format="json",
        )
        self.assertEqual(failed.status_code, status.HTTP_401_UNAUTHORIZED)

        response = self.client.post(
            reverse("accounts:login"),
            {"username": "citizen", "password": "StrongPass123!"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["username"], "citizen")
        self.assertEqual(self.client.get(reverse("accounts:current_user")).status_code, status.HTTP_200_OK)

        logout = self.client.post(reverse("accounts:logout"))
        self.assertEqual(logout.status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(
            self.client.get(reverse("accounts:current_user")).status_code,
            status.HTTP_401_UNAUTHORIZED,
        )

    def test_current_user_requires_authentication(self):
        response = self.client.get(reverse("accounts:current_user"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
