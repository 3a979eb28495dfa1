from django.conf import settings
from rest_framework.permissions import BasePermission

from .exceptions import PermissionDenied


class IsOfficer(BasePermission):
    message = "Access denied. Officers only."

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.is_officer)


def officer_complaints(storage, officer):
    if officer.department:
        return storage.complaints.list_by_department(officer.department)
    return storage.complaints.list_all()


def check_department(officer, complaint):
    """
    Status updates and notes are open to any officer unless
    COMPLAINT_ENFORCE_DEPARTMENT is on, in which case an officer with a
    department may only act on complaints of that category.
    """
    if not settings.COMPLAINT_ENFORCE_DEPARTMENT or not officer.department:
        return
    if complaint.category != officer.department:
        raise PermissionDenied("This complaint belongs to another department.")
