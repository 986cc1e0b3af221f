"""Test settings for the billboard booking project.

In-memory SQLite and plain-text logging so test output stays readable.
"""

from .base import *  # noqa: F401,F403

DEBUG = False

SECRET_KEY = 'test-secret-key'

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

STORAGES = {
    'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
    'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
}

LOGGING['handlers']['console']['formatter'] = 'plain'  # noqa: F405
LOGGING['formatters']['plain'] = {  # noqa: F405
    '()': 'structlog.stdlib.ProcessorFormatter',
    'processor': structlog.dev.ConsoleRenderer(colors=False),  # noqa: F405
}
