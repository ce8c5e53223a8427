"""
Stockroom — Test Settings

Used by pytest (see pyproject.toml). SQLite in-memory by default; set
DATABASE_URL to a PostgreSQL instance to run the row-locking tests.

@file config/settings/test.py
"""

from .base import *  # noqa: F401, F403

DEBUG = False

SECRET_KEY = 'test-only-secret-key'

ALLOWED_HOSTS = ['testserver', 'localhost']

DATABASES = {
    'default': env.db('DATABASE_URL', default='sqlite://:memory:'),  # noqa: F405
}

CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

REST_FRAMEWORK['DEFAULT_THROTTLE_CLASSES'] = []  # noqa: F405

CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = 'memory://'
CELERY_RESULT_BACKEND = 'cache+memory://'

LOGGING['loggers']['stockroom']['level'] = 'DEBUG'  # noqa: F405
# Let pytest's caplog handler on the root logger see app records.
LOGGING['loggers']['stockroom']['propagate'] = True  # noqa: F405
