import pytest
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from marketplace.models import Gig
from marketplace.tests.factories import GigFactory, ReviewFactory, UserFactory


@pytest.mark.integration
class ReviewCreateViewTest(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse("marketplace:review-create")
        self.gig = GigFactory()
        self.reviewer = UserFactory()

    def payload(self, **overrides):
        data = {"gig_id": str(self.gig.pk), "star": 5, "comment": "Excellent communication and quality."}
        data.update(overrides)
        return data

    def test_create_review(self):
        self.client.force_authenticate(self.reviewer)

        response = self.client.post(self.url, self.payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        data = response.json()["data"]
        self.assertEqual(data["star"], 5)
        self.assertEqual(data["reviewer_name"], self.reviewer.username)
        self.gig.refresh_from_db()
        self.assertEqual(self.gig.reviews_count, 1)
        self.assertEqual(self.gig.rating, 5.0)

    def test_camel_case_gig_id(self):
        self.client.force_authenticate(self.reviewer)
        payload = self.payload()
        payload["gigId"] = payload.pop("gig_id")

        self.assertEqual(self.client.post(self.url, payload, format="json").status_code, status.HTTP_201_CREATED)

    def test_duplicate_review_is_403(self):
        self.client.force_authenticate(self.reviewer)
        self.client.post(self.url, self.payload(), format="json")

        response = self.client.post(self.url, self.payload(star=1), format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(
            response.json()["error"],
            {"code": "duplicate_review", "message": "You have already reviewed this gig"},
        )

    def test_own_gig_is_403(self):
        self.client.force_authenticate(self.gig.seller)

        response = self.client.post(self.url, self.payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.json()["error"]["code"], "forbidden")

    def test_anonymous_is_401(self):
        self.assertEqual(self.client.post(self.url, self.payload(), format="json").status_code, 401)

    def test_inactive_gig_is_404(self):
        Gig.objects.filter(pk=self.gig.pk).update(status=Gig.STATUS_INACTIVE)
        self.client.force_authenticate(self.reviewer)

        self.assertEqual(self.client.post(self.url, self.payload(), format="json").status_code, 404)

    def test_invalid_star_is_400(self):
        self.client.force_authenticate(self.reviewer)

        response = self.client.post(self.url, self.payload(star=7), format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()["error"]["field"], "star")


@pytest.mark.integration
class GigReviewsViewTest(TestCase):
    def test_lists_reviews(self):
        gig = GigFactory()
        for _ in range(3):
            ReviewFactory(gig=gig)
        ReviewFactory()

        response = APIClient().get(reverse("marketplace:gig-reviews", args=[gig.pk]), {"limit": "2"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        body = response.json()
        self.assertEqual(len(body["data"]), 2)
        self.assertEqual(body["pagination"]["total_results"], 3)
        self.assertEqual(body["pagination"]["total"], 2)

    def test_deleted_reviewer_keeps_name(self):
        review = ReviewFactory(reviewer_name="former_member")
        review.reviewer.delete()

        response = APIClient().get(reverse("marketplace:gig-reviews", args=[review.gig_id]))

        entry = response.json()["data"][0]
        self.assertIsNone(entry["reviewer"])
        self.assertEqual(entry["reviewer_name"], "former_member")

    def test_unknown_gig_is_404(self):
        response = APIClient().get(reverse("marketplace:gig-reviews", args=["missing"]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
