import logging

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import permissions, status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from infrastructure.container import container
from marketplace.api.serializers import (
    DeletedResponseSerializer,
    GigCreateRequestSerializer,
    GigImageRequestSerializer,
    GigListResponseSerializer,
    GigResponseSerializer,
    GigUpdateRequestSerializer,
    SellerGigsResponseSerializer,
)
from marketplace.catalog.api.serializers import GigSerializer
from marketplace.catalog.domain.models import Gig
from utils.api_errors import ErrorResponseSerializer, error_response, success_response
from utils.logging_utils import loggable_keys


logger = logging.getLogger(__name__)


def get_search_service():
    return container.search_service()


def get_catalog_service():
    return container.catalog_service()


SEARCH_PARAMETERS = [
    OpenApiParameter("search", str, description="Text matched against title and description (max 100 chars)"),
    OpenApiParameter("category", str, enum=sorted(Gig.CATEGORIES), description="Exact category name"),
    OpenApiParameter("seller", str, description="Seller user id (userId is accepted too)"),
    OpenApiParameter("min_price", float, description="Lower price bound (minPrice is accepted too)"),
    OpenApiParameter("max_price", float, description="Upper price bound (maxPrice is accepted too)"),
    OpenApiParameter(
        "sort", str, enum=["newest", "oldest", "price_asc", "price_desc"], description="Defaults to newest"
    ),
    OpenApiParameter("page", int, description="Page number, from 1"),
    OpenApiParameter("limit", int, description="Items per page, 1-50 (default 10)"),
]


class GigListCreateView(APIView):
    """GET: search gigs. POST: publish a gig (sellers only)."""

    permission_classes = [permissions.IsAuthenticatedOrReadOnly]

    @extend_schema(
        operation_id="gigs_list",
        summary="Search gigs",
        description="""
        Filtered, sorted and paginated gig search.

        Invalid filters never fail the request: a malformed seller id, an unknown
        category or min_price > max_price return an empty page, non-numeric prices
        are ignored and unknown sort values fall back to newest.
        """,
        parameters=SEARCH_PARAMETERS,
        responses={200: GigListResponseSerializer, 503: ErrorResponseSerializer},
        tags=["Gigs"],
    )
    def get(self, request):
        result = get_search_service().search(request.query_params, viewer=request.user)
        if not result.ok:
            return error_response(result)
        page = result.value
        return success_response(GigSerializer(page.items, many=True).data, pagination=page.pagination())

    @extend_schema(
        operation_id="gigs_create",
        summary="Publish a gig",
        request=GigCreateRequestSerializer,
        responses={
            201: GigResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation failed"),
            403: OpenApiResponse(response=ErrorResponseSerializer, description="Only sellers can create gigs"),
        },
        tags=["Gigs"],
    )
    def post(self, request):
        result = get_catalog_service().create_gig(request.user, request.data)
        if not result.ok:
            return error_response(result)
        return success_response(GigSerializer(result.value).data, http_status=status.HTTP_201_CREATED)


class GigDetailView(APIView):
    permission_classes = [permissions.IsAuthenticatedOrReadOnly]

    @extend_schema(
        operation_id="gigs_retrieve",
        summary="Gig details",
        description="Inactive gigs are only visible to their seller and admins.",
        responses={200: GigResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Gigs"],
    )
    def get(self, request, gig_id):
        result = get_search_service().get_gig(gig_id, viewer=request.user)
        if not result.ok:
            return error_response(result)
        return success_response(GigSerializer(result.value).data)

    @extend_schema(
        operation_id="gigs_update",
        summary="Update a gig",
        description="Owner or admin only. Rating fields are not writable.",
        request=GigUpdateRequestSerializer,
        responses={
            200: GigResponseSerializer,
            400: ErrorResponseSerializer,
            403: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
        },
        tags=["Gigs"],
    )
    def patch(self, request, gig_id):
        logger.debug("Gig %s update with keys %s", gig_id, loggable_keys(request.data))
        result = get_catalog_service().update_gig(request.user, gig_id, request.data)
        if not result.ok:
            return error_response(result)
        return success_response(GigSerializer(result.value).data)

    @extend_schema(
        operation_id="gigs_delete",
        summary="Delete a gig",
        description="Owner or admin only. The gig's reviews are deleted with it.",
        responses={200: DeletedResponseSerializer, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Gigs"],
    )
    def delete(self, request, gig_id):
        result = get_catalog_service().delete_gig(request.user, gig_id)
        if not result.ok:
            return error_response(result)
        return Response({"success": True, "message": "Gig deleted successfully"}, status=status.HTTP_200_OK)


class GigToggleStatusView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="gigs_toggle_status",
        summary="Activate or deactivate a gig",
        request=None,
        responses={200: GigResponseSerializer, 403: ErrorResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Gigs"],
    )
    def patch(self, request, gig_id):
        result = get_catalog_service().toggle_status(request.user, gig_id)
        if not result.ok:
            return error_response(result)
        return success_response(GigSerializer(result.value).data)


class GigImageUploadView(APIView):
    permission_classes = [permissions.IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(
        operation_id="gigs_image_upload",
        summary="Upload the gig image",
        request={"multipart/form-data": GigImageRequestSerializer},
        responses={
            200: GigResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Missing, too large or unsupported"),
            403: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
            503: OpenApiResponse(response=ErrorResponseSerializer, description="Image store unavailable"),
        },
        tags=["Gigs"],
    )
    def post(self, request, gig_id):
        result = get_catalog_service().attach_image(request.user, gig_id, request.FILES.get("image"))
        if not result.ok:
            return error_response(result)
        return success_response(GigSerializer(result.value).data)


class SellerGigsView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        operation_id="gigs_by_seller",
        summary="Gigs of a seller",
        description="Newest first. The seller also sees their inactive gigs.",
        responses={200: SellerGigsResponseSerializer},
        tags=["Gigs"],
    )
    def get(self, request, user_id):
        result = get_search_service().list_seller_gigs(user_id, viewer=request.user)
        if not result.ok:
            return error_response(result)
        return success_response(GigSerializer(result.value, many=True).data)
