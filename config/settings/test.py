from .base import *

DEBUG = False

SECRET_KEY = "test-secret-key-not-for-production-use-0123456789"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

ALLOWED_HOSTS = ["testserver", "localhost"]

CORS_ALLOW_ALL_ORIGINS = True

