"""
DRF authentication backed by the ``sessionid`` request header.
"""

from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication

from users.selectors import session_get

SESSION_HEADER = "HTTP_SESSIONID"


class SessionIdAuthentication(BaseAuthentication):
    """
    Resolve ``sessionid: <key>`` to ``(user, session)``.

    No header means anonymous; an unknown key is rejected.
    """

    def authenticate(self, request):
        key = request.META.get(SESSION_HEADER, "").strip()
        if not key:
            return None

        session = session_get(key=key)
        if session is None:
            raise exceptions.AuthenticationFailed("Invalid session id.")
        return (session.user, session)

    def authenticate_header(self, request):
        return "sessionid"
