from marketplace.catalog.domain.models import Gig, Review


__all__ = ["Gig", "Review"]
