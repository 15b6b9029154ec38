from prometheus_client import Counter, Gauge, Histogram


# Catalog Metrics
gigs_created_total = Counter("marketplace_gigs_created_total", "Total gigs created")
gig_status_toggles_total = Counter("marketplace_gig_status_toggles_total", "Gig status changes", ["status"])
gig_images_uploaded_total = Counter("marketplace_gig_images_uploaded_total", "Gig image uploads", ["status"])
gig_images_orphaned_total = Counter(
    "marketplace_gig_images_orphaned_total", "Replaced or deleted gig images the store failed to remove"
)

# Search Metrics
search_duration = Histogram(
    "marketplace_search_duration_seconds",
    "Gig search time",
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, float("inf")],
)
search_results = Histogram(
    "marketplace_search_results",
    "Matching gigs per search",
    buckets=[0, 1, 5, 10, 50, 100, 500, float("inf")],
)

# Reputation Metrics
reviews_recorded_total = Counter("marketplace_reviews_recorded_total", "Reviews recorded")
reviews_rejected_total = Counter("marketplace_reviews_rejected_total", "Reviews rejected", ["reason"])
rating_repairs_total = Counter("marketplace_rating_repairs_total", "Gig rating aggregates repaired")
inconsistent_gigs = Gauge("marketplace_inconsistent_gigs", "Gigs whose aggregates differ from their reviews")
inconsistent_sellers = Gauge(
    "marketplace_inconsistent_sellers", "Seller profiles whose rating differs from their gigs' reviews"
)
