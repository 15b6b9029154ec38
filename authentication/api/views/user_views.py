from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.api.authentication import clear_session_cookie
from authentication.api.serializers import SellerProfileSerializer, UserSerializer
from authentication.api.serializers.response_serializers import (
    AccountUpdateRequestSerializer,
    BecomeSellerRequestSerializer,
    DeleteAccountRequestSerializer,
    MessageResponseSerializer,
    SellerProfileResponseSerializer,
    SellerProfileUpdateRequestSerializer,
    UserResponseSerializer,
)
from infrastructure.container import container
from utils.api_errors import ErrorResponseSerializer, error_response, success_response


def get_account_service():
    return container.account_service()


def get_seller_service():
    return container.seller_service()


def _user_data(user):
    return UserSerializer(user, context={"include_seller_profile": True}).data


class CurrentUserView(APIView):
    """GET/PATCH/DELETE the authenticated account"""

    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="users_me_retrieve",
        summary="Current user",
        description="Account details of the session owner, with the seller profile for sellers.",
        responses={200: UserResponseSerializer, 401: ErrorResponseSerializer},
        tags=["Users"],
    )
    def get(self, request):
        result = get_account_service().get_account(request.user.pk)
        if not result.ok:
            return error_response(result)
        return success_response(_user_data(result.value))

    @extend_schema(
        operation_id="users_me_update",
        summary="Update current user",
        description="""
        Update full name, username, email or password.

        Changing the password requires `current_password`.
        """,
        request=AccountUpdateRequestSerializer,
        responses={
            200: UserResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation failed or identity taken"),
            401: OpenApiResponse(response=ErrorResponseSerializer, description="Wrong current password"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Account banned"),
        },
        tags=["Users"],
    )
    def patch(self, request):
        result = get_account_service().update_account(request.user, request.user.pk, request.data)
        if not result.ok:
            return error_response(result)
        return success_response(_user_data(result.value))

    @extend_schema(
        operation_id="users_me_delete",
        summary="Delete current user",
        description="Delete the account, its seller profile and its gigs. Reviews keep the reviewer name.",
        request=DeleteAccountRequestSerializer,
        responses={
            200: MessageResponseSerializer,
            401: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid password"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Account banned"),
        },
        tags=["Users"],
    )
    def delete(self, request):
        result = get_account_service().delete_account(request.user, request.data.get("password"))
        if not result.ok:
            return error_response(result)
        response = Response(
            {"success": True, "message": "User account successfully deleted"}, status=status.HTTP_200_OK
        )
        return clear_session_cookie(response)


class BecomeSellerView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="users_become_seller",
        summary="Become a seller",
        description="""
        Promote the current buyer to seller and create the seller profile.

        **Requirements:**
        - Role must be buyer (sellers get `already_seller`, admins `forbidden`)
        - skills: 1-20 entries; description: 50-1000 chars; hourly_rate: 1-1000 in steps of 0.5;
          title: 5-100 chars; languages: up to 10
        """,
        request=BecomeSellerRequestSerializer,
        responses={
            201: SellerProfileResponseSerializer,
            400: OpenApiResponse(
                response=ErrorResponseSerializer, description="Validation failed or already a seller"
            ),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Not allowed to become a seller"),
        },
        tags=["Sellers"],
    )
    def post(self, request):
        result = get_seller_service().become_seller(request.user.pk, request.data)
        if not result.ok:
            return error_response(result)
        return success_response(SellerProfileSerializer(result.value).data, http_status=status.HTTP_201_CREATED)


class SellerProfileDetailView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        operation_id="users_seller_profile_retrieve",
        summary="Public seller profile",
        description="Seller profile of the user with the given id.",
        responses={200: SellerProfileResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Sellers"],
    )
    def get(self, request, user_id):
        result = get_seller_service().get_profile(user_id)
        if not result.ok:
            return error_response(result)
        return success_response(SellerProfileSerializer(result.value).data)


class MySellerProfileView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="users_seller_profile_update",
        summary="Update own seller profile",
        description="Update title, description, skills, languages, hourly rate or availability.",
        request=SellerProfileUpdateRequestSerializer,
        responses={
            200: SellerProfileResponseSerializer,
            400: ErrorResponseSerializer,
            403: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
        },
        tags=["Sellers"],
    )
    def patch(self, request):
        result = get_seller_service().update_profile(request.user, request.user.pk, request.data)
        if not result.ok:
            return error_response(result)
        return success_response(SellerProfileSerializer(result.value).data)
