"""
Views — thin, no business logic (HackSoft Django Styleguide).
"""

from rest_framework import serializers, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from users.services import session_delete, user_login, user_register


class ProfileOutputSerializer(serializers.Serializer):
    email = serializers.EmailField()
    name = serializers.CharField()
    location = serializers.DictField(allow_null=True)


class RegisterApi(APIView):
    """POST /users/register — create an account."""

    authentication_classes = ()

    class InputSerializer(serializers.Serializer):
        email = serializers.EmailField()
        name = serializers.CharField(max_length=255)
        password = serializers.CharField(min_length=6, trim_whitespace=False)
        location = serializers.CharField(required=False, allow_blank=True)

    def post(self, request):
        input_ser = self.InputSerializer(data=request.data)
        input_ser.is_valid(raise_exception=True)

        try:
            user = user_register(**input_ser.validated_data)
        except ValueError as exc:
            return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(ProfileOutputSerializer(user).data, status=status.HTTP_201_CREATED)


class LoginApi(APIView):
    """POST /users/login — exchange credentials for a session id."""

    authentication_classes = ()

    class InputSerializer(serializers.Serializer):
        email = serializers.EmailField()
        password = serializers.CharField(trim_whitespace=False)

    def post(self, request):
        input_ser = self.InputSerializer(data=request.data)
        input_ser.is_valid(raise_exception=True)

        session = user_login(**input_ser.validated_data)
        if session is None:
            return Response(
                {"error": "Invalid email or password."},
                status=status.HTTP_401_UNAUTHORIZED,
            )
        return Response({"sessionId": session.key})


class LogoutApi(APIView):
    """POST /users/logout — drop the caller's session."""

    permission_classes = [IsAuthenticated]

    def post(self, request):
        session_delete(session=request.auth)
        return Response({"message": "Logged out successfully"})


class ProfileApi(APIView):
    """GET /users/profile — the caller's profile."""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(ProfileOutputSerializer(request.user).data)
