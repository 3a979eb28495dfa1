from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from .exceptions import NotFound, PermissionDenied
from .permissions import IsOfficer, check_department, officer_complaints
from .serializers import (
    ComplaintCreateSerializer,
    ComplaintSerializer,
    NoteCreateSerializer,
    NoteSerializer,
    StatusUpdateSerializer,
)
from .stores import get_storage


def get_complaint_or_404(storage, complaint_id):
    complaint = storage.complaints.get_by_id(complaint_id)
    if complaint is None:
        raise NotFound()
    return complaint


class ComplaintListCreateView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        complaints = get_storage().complaints.list_by_citizen(request.user.id)
        return Response(ComplaintSerializer(complaints, many=True).data)

    def post(self, request):
        serializer = ComplaintCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        complaint = get_storage().complaints.create(
            citizen_id=request.user.id,
            **serializer.validated_data,
        )
        return Response(ComplaintSerializer(complaint).data, status=status.HTTP_201_CREATED)


class ComplaintDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, complaint_id):
        complaint = get_complaint_or_404(get_storage(), complaint_id)
        if not complaint.can_be_viewed_by(request.user):
            raise PermissionDenied("You do not have permission to view this complaint.")
        return Response(ComplaintSerializer(complaint).data)


class ComplaintTrackView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, human_id):
        storage = get_storage()
        complaint = storage.complaints.get_by_human_id(human_id)
        if complaint is None:
            raise NotFound()
        data = dict(ComplaintSerializer(complaint).data)
        data["notes"] = NoteSerializer(storage.notes.list_by_complaint(complaint.id), many=True).data
        return Response(data)


class ComplaintStatusView(APIView):
    permission_classes = [IsOfficer]

    def patch(self, request, complaint_id):
        serializer = StatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        storage = get_storage()
        check_department(request.user, get_complaint_or_404(storage, complaint_id))
        complaint = storage.complaints.update_status(complaint_id, serializer.validated_data["status"])
        if complaint is None:
            raise NotFound()
        return Response(ComplaintSerializer(complaint).data)


class ComplaintNoteListCreateView(APIView):
    def get_permissions(self):
        if self.request.method == "POST":
            return [IsOfficer()]
        return [AllowAny()]

    def get(self, request, complaint_id):
        notes = get_storage().notes.list_by_complaint(complaint_id)
        return Response(NoteSerializer(notes, many=True).data)

    def post(self, request, complaint_id):
        serializer = NoteCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        storage = get_storage()
        check_department(request.user, get_complaint_or_404(storage, complaint_id))
        note = storage.notes.create(
            complaint_id=complaint_id,
            officer_id=request.user.id,
            officer_name=request.user.display_name,
            text=serializer.validated_data["note"],
        )
        return Response(NoteSerializer(note).data, status=status.HTTP_201_CREATED)


class OfficerComplaintListView(APIView):
    permission_classes = [IsOfficer]

    def get(self, request):
        complaints = officer_complaints(get_storage(), request.user)
        return Response(ComplaintSerializer(complaints, many=True).data)
