import uuid
from decimal import Decimal

import factory
from django.contrib.auth import get_user_model
from django.contrib.auth.hashers import make_password
from faker import Faker

from authentication.models import SellerProfile
from marketplace.models import Gig, Review


User = get_user_model()
fake = Faker()

DEFAULT_PASSWORD = "Defaultpass1!"


class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = User

    id = factory.LazyFunction(uuid.uuid4)
    username = factory.Sequence(lambda n: f"user_{n}")
    email = factory.Sequence(lambda n: f"user_{n}@example.com")
    full_name = factory.LazyFunction(lambda: fake.name().replace(".", "")[:50])
    password = factory.LazyFunction(lambda: make_password(DEFAULT_PASSWORD))
    is_active = True
    role = "buyer"


class SellerProfileFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = SellerProfile

    user = factory.SubFactory(UserFactory, role="seller")
    title = factory.Sequence(lambda n: f"Seller title {n}")
    description = factory.LazyFunction(lambda: fake.text(max_nb_chars=200).ljust(60, "."))
    skills = factory.LazyFunction(lambda: ["Python", "Django"])
    languages = factory.LazyFunction(lambda: ["English"])
    hourly_rate = Decimal("25.00")


class SellerFactory(UserFactory):
    role = "seller"
    username = factory.Sequence(lambda n: f"seller_{n}")
    email = factory.Sequence(lambda n: f"seller_{n}@example.com")
    seller_profile = factory.RelatedFactory(SellerProfileFactory, factory_related_name="user")


class AdminFactory(UserFactory):
    role = "admin"
    is_superuser = True
    is_staff = True
    username = factory.Sequence(lambda n: f"staff_{n}")
    email = factory.Sequence(lambda n: f"staff_{n}@example.com")


class GigFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Gig

    id = factory.LazyFunction(uuid.uuid4)
    seller = factory.SubFactory(SellerFactory)
    title = factory.Sequence(lambda n: f"Professional gig number {n}")
    description = factory.LazyFunction(lambda: fake.text(max_nb_chars=300).ljust(60, "."))
    category = "Design"
    price = Decimal("50.00")
    delivery_time = 3
    status = Gig.STATUS_ACTIVE


class ReviewFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Review

    gig = factory.SubFactory(GigFactory)
    reviewer = factory.SubFactory(UserFactory)
    reviewer_name = factory.LazyAttribute(lambda o: o.reviewer.username if o.reviewer else "")
    star = 5
    comment = factory.LazyFunction(lambda: fake.sentence(nb_words=8))
