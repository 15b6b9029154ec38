"""
Prometheus Metrics

Defines the Prometheus metrics for account and session monitoring.
Metrics are exposed at /api/metrics/ for Prometheus scraping.
"""

from prometheus_client import Counter, Histogram

# ===== Login Metrics =====

login_total = Counter("auth_login_total", "Total login attempts", ["status"])
"""
Total login attempts counter.
Labels: status (success/failed)

Example:
    login_total.labels(status='success').inc()
"""

login_duration = Histogram(
    "auth_login_duration_seconds", "Login request duration in seconds", buckets=[0.05, 0.1, 0.5, 1.0, 2.0, 5.0]
)
"""
Login duration histogram, including the password hash computation.

Example:
    with login_duration.time():
        # Login logic here
        pass
"""


# ===== Registration Metrics =====

registration_total = Counter("auth_registration_total", "Total registration attempts", ["status"])
"""
Total registration attempts.
Labels: status (success/failed)
"""

registration_failed = Counter("auth_registration_failed", "Failed registration attempts", ["reason"])
"""
Failed registrations counter.
Labels: reason (duplicate_identity, validation_failed, store_unavailable)
"""


# ===== Session Metrics =====

jwt_validation_total = Counter("auth_jwt_validation_total", "Total JWT validations", ["status"])
"""
Session token checks.
Labels: status (valid/invalid)
"""


# ===== Seller Metrics =====

seller_upgrades_total = Counter("auth_seller_upgrades_total", "Buyer to seller transitions", ["status"])
"""
Become-seller attempts.
Labels: status (success/already_seller/validation_failed/forbidden)
"""

account_deletions_total = Counter("auth_account_deletions_total", "Deleted accounts")
