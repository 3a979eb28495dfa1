from django.urls import path

from .views import (
    ComplaintDetailView,
    ComplaintListCreateView,
    ComplaintNoteListCreateView,
    ComplaintStatusView,
    ComplaintTrackView,
    OfficerComplaintListView,
)

app_name = "complaints"

urlpatterns = [
    path("complaints/", ComplaintListCreateView.as_view(), name="complaint_list"),
    path("complaints/track/<str:human_id>/", ComplaintTrackView.as_view(), name="complaint_track"),
    path("complaints/<uuid:complaint_id>/", ComplaintDetailView.as_view(), name="complaint_detail"),
    path("complaints/<uuid:complaint_id>/status/", ComplaintStatusView.as_view(), name="complaint_status"),
    path("complaints/<uuid:complaint_id>/notes/", ComplaintNoteListCreateView.as_view(), name="complaint_notes"),
    path("officer/complaints/", OfficerComplaintListView.as_view(), name="officer_complaints"),
]
