from rest_framework import authentication


class SessionAuthentication(authentication.SessionAuthentication):
    """Session auth that answers anonymous requests with 401 instead of 403."""

    def authenticate_header(self, request):
        return "Session"
