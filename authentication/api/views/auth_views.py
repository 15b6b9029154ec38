import logging

from drf_spectacular.utils import OpenApiExample, OpenApiResponse, extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.api.authentication import clear_session_cookie, set_session_cookie
from authentication.api.serializers import UserSerializer
from authentication.api.serializers.response_serializers import (
    LoginRequestSerializer,
    MessageResponseSerializer,
    RegisterRequestSerializer,
    SessionResponseSerializer,
)
from infrastructure.container import container
from utils.api_errors import ErrorResponseSerializer, error_response, success_response
from utils.logging_utils import sanitize_payload


logger = logging.getLogger(__name__)


# Dependency Injection Helpers
def get_credential_service():
    return container.credential_service()


def get_session_service():
    return container.session_service()


def _session_response(user, http_status):
    token = get_session_service().issue(user)
    response = success_response({"user": UserSerializer(user).data, "token": token}, http_status=http_status)
    return set_session_cookie(response, token)


class RegisterAPIView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="auth_register",
        summary="Register a new account",
        description="""
        Create a buyer account and start a session.

        **Rules:**
        - Email is stored lower-cased and must be unique
        - Username is case-sensitive, unique, and may not contain "admin"
        - The session token is returned in the body and set as an HTTP-only cookie
        """,
        request=RegisterRequestSerializer,
        responses={
            201: OpenApiResponse(response=SessionResponseSerializer, description="Account created"),
            400: OpenApiResponse(
                response=ErrorResponseSerializer,
                description="Validation failed or duplicate identity",
                examples=[
                    OpenApiExample(
                        "Duplicate identity",
                        value={
                            "success": False,
                            "error": {"code": "duplicate_identity", "message": "Email or username already exists"},
                        },
                    )
                ],
            ),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        logger.info("Registration request for %s", sanitize_payload(request.data, ["email", "username"]))
        result = get_credential_service().register(
            request.data.get("full_name") or request.data.get("fullName"),
            request.data.get("username"),
            request.data.get("email"),
            request.data.get("password"),
        )
        if not result.ok:
            return error_response(result)
        return _session_response(result.value, status.HTTP_201_CREATED)


class LoginAPIView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="auth_login",
        summary="Login with email and password",
        description="""
        Authenticate with email and password and start a session.

        Unknown email and wrong password return the same 401 response.
        """,
        request=LoginRequestSerializer,
        responses={
            200: OpenApiResponse(response=SessionResponseSerializer, description="Login successful"),
            401: OpenApiResponse(
                response=ErrorResponseSerializer,
                description="Invalid credentials",
                examples=[
                    OpenApiExample(
                        "Invalid credentials",
                        value={
                            "success": False,
                            "error": {"code": "invalid_credentials", "message": "Invalid email or password"},
                        },
                    )
                ],
            ),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        result = get_credential_service().verify(request.data.get("email"), request.data.get("password"))
        if not result.ok:
            return error_response(result)
        return _session_response(result.value, status.HTTP_200_OK)


class LogoutAPIView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="auth_logout",
        summary="Logout",
        description="Expire the session cookie. Tokens held elsewhere stay valid until they expire.",
        request=None,
        responses={200: MessageResponseSerializer},
        tags=["Authentication"],
    )
    def post(self, request):
        response = Response({"success": True, "message": "User has been logged out"}, status=status.HTTP_200_OK)
        return clear_session_cookie(response)
