from .gig import Gig
from .review import Review


__all__ = ["Gig", "Review"]
