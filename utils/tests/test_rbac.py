import uuid
from types import SimpleNamespace

import pytest

from utils.rbac import Action, PolicyViolation, authorize, is_admin, is_owner


def make_user(role="buyer", banned=False, superuser=False):
    return SimpleNamespace(
        id=uuid.uuid4(), role=role, is_banned=banned, is_superuser=superuser, is_authenticated=True
    )


ANONYMOUS = SimpleNamespace(id=None, is_authenticated=False)


def make_gig(owner, status="active"):
    return SimpleNamespace(seller_id=owner.id, status=status)


@pytest.mark.unit
class TestAuthorize:
    def test_owner_can_update_own_gig(self):
        seller = make_user("seller")
        assert authorize(seller, Action.UPDATE_GIG, make_gig(seller)) is True

    def test_other_seller_cannot_update_gig(self):
        owner, other = make_user("seller"), make_user("seller")
        with pytest.raises(PolicyViolation) as excinfo:
            authorize(other, Action.DELETE_GIG, make_gig(owner))
        assert excinfo.value.code == PolicyViolation.FORBIDDEN

    def test_admin_can_mutate_any_gig(self):
        owner, admin = make_user("seller"), make_user("admin")
        for action in (Action.UPDATE_GIG, Action.DELETE_GIG, Action.TOGGLE_GIG_STATUS):
            assert authorize(admin, action, make_gig(owner)) is True

    def test_superuser_counts_as_admin(self):
        assert is_admin(make_user("buyer", superuser=True))

    def test_anonymous_cannot_mutate(self):
        with pytest.raises(PolicyViolation):
            authorize(ANONYMOUS, Action.CREATE_REVIEW)

    def test_banned_owner_cannot_mutate(self):
        seller = make_user("seller", banned=True)
        with pytest.raises(PolicyViolation) as excinfo:
            authorize(seller, Action.UPDATE_GIG, make_gig(seller))
        assert excinfo.value.code == PolicyViolation.FORBIDDEN

    def test_owned_action_requires_resource(self):
        with pytest.raises(ValueError):
            authorize(make_user("seller"), Action.UPDATE_GIG)

    @pytest.mark.parametrize("role", ["buyer", "admin"])
    def test_only_sellers_create_gigs(self, role):
        with pytest.raises(PolicyViolation):
            authorize(make_user(role), Action.CREATE_GIG)

    def test_seller_creates_gig(self):
        assert authorize(make_user("seller"), Action.CREATE_GIG) is True

    def test_buyer_may_become_seller(self):
        assert authorize(make_user("buyer"), Action.BECOME_SELLER) is True

    def test_seller_becoming_seller_is_already_seller(self):
        with pytest.raises(PolicyViolation) as excinfo:
            authorize(make_user("seller"), Action.BECOME_SELLER)
        assert excinfo.value.code == PolicyViolation.ALREADY_SELLER

    def test_admin_cannot_become_seller(self):
        with pytest.raises(PolicyViolation) as excinfo:
            authorize(make_user("admin"), Action.BECOME_SELLER)
        assert excinfo.value.code == PolicyViolation.FORBIDDEN

    def test_seller_cannot_review_own_gig(self):
        seller = make_user("seller")
        with pytest.raises(PolicyViolation):
            authorize(seller, Action.CREATE_REVIEW, make_gig(seller))

    def test_buyer_reviews_gig(self):
        assert authorize(make_user("buyer"), Action.CREATE_REVIEW, make_gig(make_user("seller"))) is True

    def test_inactive_gig_visible_to_owner_and_admin_only(self):
        owner = make_user("seller")
        gig = make_gig(owner, status="inactive")

        assert authorize(owner, Action.VIEW_GIG, gig) is True
        assert authorize(make_user("admin"), Action.VIEW_GIG, gig) is True
        with pytest.raises(PolicyViolation):
            authorize(make_user("buyer"), Action.VIEW_GIG, gig)
        with pytest.raises(PolicyViolation):
            authorize(ANONYMOUS, Action.VIEW_GIG, gig)

    def test_active_gig_visible_to_anonymous(self):
        assert authorize(ANONYMOUS, Action.VIEW_GIG, make_gig(make_user("seller"))) is True

    def test_account_actions_use_the_account_id(self):
        user = make_user()
        account = SimpleNamespace(id=user.id)
        assert authorize(user, Action.UPDATE_ACCOUNT, account) is True
        with pytest.raises(PolicyViolation):
            authorize(make_user(), Action.DELETE_ACCOUNT, account)

    def test_is_owner_compares_ids_as_strings(self):
        user = make_user("seller")
        assert is_owner(user, SimpleNamespace(seller_id=str(user.id)))
        assert not is_owner(user, None)
