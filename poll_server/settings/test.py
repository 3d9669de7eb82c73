"""
Test settings for poll_server project.
"""

from .base import *

# Use SQLite for testing
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}


# Disable migrations for faster testing
class DisableMigrations:
    def __contains__(self, item):
        return True

    def __getitem__(self, item):
        return None


MIGRATION_MODULES = DisableMigrations()

# Use faster password hasher for testing
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

# Disable logging during tests
LOGGING_CONFIG = None

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    }
}

CSRF_COOKIE_SECURE = False
SESSION_COOKIE_SECURE = False

# Gateway endpoints are never reached in tests; requests.post is patched.
PROJECT_URL = 'https://project.example.test'
PROJECT_ANON_KEY = 'test-anon-key'
STRIPE_PUBLIC_KEY = 'pk_test_51TestKey'
PAYMENT_GATEWAY_TIMEOUT = 5
