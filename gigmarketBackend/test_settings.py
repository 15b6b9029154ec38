import os

# Mock SECRET_KEY for tests BEFORE importing settings to bypass validation
os.environ.setdefault("SECRET_KEY", "django-insecure-test-key-for-unit-tests-only")

from .settings import *  # noqa: F403


# Override Database to use SQLite for tests
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",  # noqa: F405
        "OPTIONS": {"timeout": 20},
        # File based so concurrent test threads get real connections and lock waits
        "TEST": {"NAME": BASE_DIR / "test_db.sqlite3"},  # noqa: F405
    }
}

# Fast hashing; the production hashers are exercised in settings.py only
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Run Celery tasks inline
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = "memory://"

# Keep uploaded images in memory
INFRASTRUCTURE["IMAGE_STORE_BACKEND"] = "memory"  # noqa: F405

JWT_COOKIE_SECURE = False

LOGGING["loggers"]["authentication"]["level"] = "WARNING"  # noqa: F405
LOGGING["loggers"]["marketplace"]["level"] = "WARNING"  # noqa: F405
