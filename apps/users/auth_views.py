"""Views for authentication flows (register, login, back-office login)."""

from __future__ import annotations

import structlog
from rest_framework import exceptions, status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken  # type: ignore

from .auth_serializers import LoginSerializer, RegisterSerializer
from .serializers import UserSerializer

logger = structlog.get_logger(__name__)


def _tokens_for_user(user) -> dict[str, str]:
    refresh = RefreshToken.for_user(user)
    refresh["role"] = user.role
    return {"refresh": str(refresh), "access": str(refresh.access_token)}


class RegisterView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):  # type: ignore
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        logger.info("auth.registered", user_id=str(user.id))
        data = {
            "user": UserSerializer(user).data,
            "tokens": _tokens_for_user(user),
        }
        return Response(data, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):  # type: ignore
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]
        self.check_role(user)
        logger.info("auth.login", user_id=str(user.id), role=user.role)
        data = {
            "user": UserSerializer(user).data,
            "tokens": _tokens_for_user(user),
        }
        return Response(data, status=status.HTTP_200_OK)

    def get_authenticate_header(self, request):  # type: ignore
        # Keeps bad credentials a 401 without any authentication class
        return 'Bearer realm="api"'

    def check_role(self, user) -> None:
        """Any active user may sign in here."""


class BackOfficeLoginView(LoginView):
    """Login for the admin back office; customers are refused."""

    def check_role(self, user) -> None:
        if not user.is_back_office():
            logger.warning("auth.back_office_denied", user_id=str(user.id))
            raise exceptions.PermissionDenied("Back office access required.")
