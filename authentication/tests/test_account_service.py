from io import BytesIO

import pytest

from authentication.domain.services import AccountService
from authentication.models import CustomUser, SellerProfile
from infrastructure.container import container
from marketplace.models import Gig, Review
from marketplace.tests.factories import DEFAULT_PASSWORD, AdminFactory, GigFactory, ReviewFactory, UserFactory
from utils.service_base import ErrorCodes


@pytest.fixture
def service():
    return AccountService()


@pytest.mark.django_db
@pytest.mark.integration
class TestUpdateAccount:
    def test_updates_name_and_username(self, service):
        user = UserFactory()

        result = service.update_account(user, user.pk, {"full_name": "New Name", "username": "new_name"})

        assert result.ok
        user.refresh_from_db()
        assert (user.full_name, user.username) == ("New Name", "new_name")

    def test_email_is_lowercased(self, service):
        user = UserFactory()

        service.update_account(user, user.pk, {"email": "New.Address@Example.com"})

        user.refresh_from_db()
        assert user.email == "new.address@example.com"

    def test_taken_username_and_email(self, service):
        taken = UserFactory()
        user = UserFactory()

        by_username = service.update_account(user, user.pk, {"username": taken.username})
        by_email = service.update_account(user, user.pk, {"email": taken.email.upper()})

        assert by_username.error == ErrorCodes.DUPLICATE_IDENTITY
        assert by_username.field == "username"
        assert by_email.error == ErrorCodes.DUPLICATE_IDENTITY
        assert by_email.field == "email"

    def test_password_change_requires_current_password(self, service):
        user = UserFactory()

        missing = service.update_account(user, user.pk, {"password": "Changed1!pass"})
        wrong = service.update_account(user, user.pk, {"password": "Changed1!pass", "current_password": "Nope1!aa"})
        changed = service.update_account(
            user, user.pk, {"password": "Changed1!pass", "current_password": DEFAULT_PASSWORD}
        )

        assert missing.error == ErrorCodes.VALIDATION_FAILED
        assert missing.field == "current_password"
        assert wrong.error == ErrorCodes.INVALID_CREDENTIALS
        assert changed.ok
        user.refresh_from_db()
        assert user.check_password("Changed1!pass")

    def test_role_cannot_be_changed(self, service):
        user = UserFactory()

        service.update_account(user, user.pk, {"role": "admin", "is_banned": True})

        user.refresh_from_db()
        assert user.role == "buyer"
        assert user.is_banned is False

    def test_other_user_is_forbidden_admin_is_not(self, service):
        user = UserFactory()

        assert service.update_account(UserFactory(), user.pk, {"full_name": "Changed"}).error == ErrorCodes.FORBIDDEN
        assert service.update_account(AdminFactory(), user.pk, {"full_name": "Changed"}).ok


@pytest.mark.django_db
@pytest.mark.integration
class TestDeleteAccount:
    def test_wrong_password_keeps_account(self, service):
        user = UserFactory()

        result = service.delete_account(user, "Wrong1!pass")

        assert result.error == ErrorCodes.INVALID_CREDENTIALS
        assert CustomUser.objects.filter(pk=user.pk).exists()

    def test_delete_cascades_to_seller_data_but_keeps_reviews(self, service):
        gig = GigFactory()
        seller = gig.seller
        reviewer = UserFactory(username="kind_reviewer")
        review = ReviewFactory(gig=GigFactory(), reviewer=reviewer)
        own_gig_review = ReviewFactory(gig=gig)

        assert service.delete_account(seller, DEFAULT_PASSWORD).ok
        assert service.delete_account(reviewer, DEFAULT_PASSWORD).ok

        assert not Gig.objects.filter(pk=gig.pk).exists()
        assert not SellerProfile.objects.filter(user_id=seller.pk).exists()
        assert not Review.objects.filter(pk=own_gig_review.pk).exists()

        review.refresh_from_db()
        assert review.reviewer is None
        assert review.get_reviewer_display_name() == "kind_reviewer"

    def test_delete_removes_stored_gig_images(self, service):
        container.configure_for_testing()
        image_store = container.image_store()
        gig = GigFactory()
        stored = image_store.upload(BytesIO(b"image"), f"gigs/{gig.pk}/cover.png", "image/png")
        Gig.objects.filter(pk=gig.pk).update(image_url=stored.url, image_key=stored.key)

        try:
            assert service.delete_account(gig.seller, DEFAULT_PASSWORD).ok
            assert not image_store.delete(stored.key)
        finally:
            container.reset()

    def test_get_account(self, service):
        user = UserFactory()

        assert service.get_account(user.pk).value == user
        assert service.get_account("missing").error == ErrorCodes.NOT_FOUND
