from drf_spectacular.utils import OpenApiExample, OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import permissions, status
from rest_framework.views import APIView

from infrastructure.container import container
from marketplace.api.serializers import (
    ReviewCreateRequestSerializer,
    ReviewListResponseSerializer,
    ReviewResponseSerializer,
)
from marketplace.catalog.api.serializers import ReviewSerializer
from utils.api_errors import ErrorResponseSerializer, error_response, success_response


def get_reputation_service():
    return container.reputation_service()


class ReviewCreateView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    @extend_schema(
        operation_id="reviews_create",
        summary="Review a gig",
        description="""
        Record a review and update the gig's and the seller's rating in the same transaction.

        One review per user and gig; sellers cannot review their own gigs.
        """,
        request=ReviewCreateRequestSerializer,
        responses={
            201: ReviewResponseSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Validation failed"),
            403: OpenApiResponse(
                response=ErrorResponseSerializer,
                description="Already reviewed, own gig or banned account",
                examples=[
                    OpenApiExample(
                        "Duplicate review",
                        value={
                            "success": False,
                            "error": {"code": "duplicate_review", "message": "You have already reviewed this gig"},
                        },
                    )
                ],
            ),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Gig not found or inactive"),
        },
        tags=["Reviews"],
    )
    def post(self, request):
        gig_id = request.data.get("gig_id") or request.data.get("gigId")
        result = get_reputation_service().record_review(
            gig_id, request.user, request.data.get("star"), request.data.get("comment")
        )
        if not result.ok:
            return error_response(result)
        return success_response(ReviewSerializer(result.value).data, http_status=status.HTTP_201_CREATED)


class GigReviewsView(APIView):
    permission_classes = [permissions.AllowAny]

    @extend_schema(
        operation_id="reviews_list",
        summary="Reviews of a gig",
        parameters=[
            OpenApiParameter("page", int, description="Page number, from 1"),
            OpenApiParameter("limit", int, description="Items per page, 1-50 (default 20)"),
        ],
        responses={200: ReviewListResponseSerializer, 404: ErrorResponseSerializer},
        tags=["Reviews"],
    )
    def get(self, request, gig_id):
        result = get_reputation_service().list_reviews(
            gig_id,
            page=request.query_params.get("page"),
            limit=request.query_params.get("limit"),
            viewer=request.user,
        )
        if not result.ok:
            return error_response(result)
        page = result.value
        return success_response(ReviewSerializer(page.items, many=True).data, pagination=page.pagination())
