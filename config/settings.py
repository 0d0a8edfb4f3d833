"""
Django settings for the HireWork project.

Every deployment-specific value is read from the environment; the defaults
are meant for local development only.
"""
import os
from decimal import Decimal
from pathlib import Path

from .database import get_database_config

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in ('1', 'true', 'yes', 'on'):
        return True
    if normalized in ('0', 'false', 'no', 'off'):
        return False
    return default


# =============================================================================
# Core
# =============================================================================

SECRET_KEY = os.getenv(
    'DJANGO_SECRET_KEY',
    'dev-only-insecure-secret-key-change-me-before-deploying-hirework',
)
DEBUG = _env_bool('DEBUG', True)
ALLOWED_HOSTS = [h.strip() for h in os.getenv('ALLOWED_HOSTS', '*').split(',') if h.strip()]

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'apps.core',
    'apps.identity',
    'apps.ledger',
    'apps.catalog',
    'apps.hiring',
    'apps.feed',
    'apps.notifications',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'config.wsgi.application'
ASGI_APPLICATION = 'config.asgi.application'

DATABASES = {
    'default': get_database_config(BASE_DIR),
}

AUTH_USER_MODEL = 'identity.User'
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

FRONTEND_URL = os.getenv('FRONTEND_URL', 'http://localhost:3000')


# =============================================================================
# Authentication (JWT bearer tokens)
# =============================================================================

JWT_SECRET = os.getenv('JWT_SECRET', SECRET_KEY)
JWT_EXPIRE_DAYS = int(os.getenv('JWT_EXPIRE_DAYS', '7'))
PASSWORD_MIN_LENGTH = 6
PASSWORD_RESET_TOKEN_TTL_MINUTES = int(os.getenv('PASSWORD_RESET_TOKEN_TTL_MINUTES', '60'))


# =============================================================================
# Ledger
# =============================================================================

LEDGER_MAX_DEPOSIT = Decimal(os.getenv('LEDGER_MAX_DEPOSIT', '10000.00'))


# =============================================================================
# Background tasks
# =============================================================================

# local  -> run in-process on a background thread pool (development)
# celery -> queue through the Celery broker (production)
TASK_BACKEND = os.getenv('TASK_BACKEND', 'local')

# Run local tasks inline in the caller's thread instead of the pool.
TASK_LOCAL_EAGER = _env_bool('TASK_LOCAL_EAGER', False)
TASK_LOCAL_WORKERS = int(os.getenv('TASK_LOCAL_WORKERS', '4'))

CELERY_BROKER_URL = os.getenv('CELERY_BROKER_URL', 'redis://localhost:6379/0')
CELERY_RESULT_BACKEND = os.getenv('CELERY_RESULT_BACKEND', CELERY_BROKER_URL)
CELERY_TASK_SERIALIZER = 'json'
CELERY_ACCEPT_CONTENT = ['json']
CELERY_TASK_ALWAYS_EAGER = _env_bool('CELERY_TASK_ALWAYS_EAGER', False)


# =============================================================================
# Email
# =============================================================================

EMAIL_BACKEND = os.getenv('EMAIL_BACKEND', 'django.core.mail.backends.smtp.EmailBackend')
EMAIL_HOST = os.getenv('SMTP_HOST', 'smtp.gmail.com')
EMAIL_PORT = int(os.getenv('SMTP_PORT', '465'))
EMAIL_USE_SSL = _env_bool('SMTP_SECURE', True)
EMAIL_USE_TLS = False
EMAIL_HOST_USER = os.getenv('SMTP_USER', '')
EMAIL_HOST_PASSWORD = os.getenv('SMTP_PASS', '')
EMAIL_TIMEOUT = int(os.getenv('SMTP_TIMEOUT', '10'))
EMAIL_FROM_NAME = os.getenv('SMTP_FROM_NAME', 'HireWork Team')
DEFAULT_FROM_EMAIL = f'"{EMAIL_FROM_NAME}" <{EMAIL_HOST_USER or "no-reply@hirework.local"}>'
SMTP_ENABLE_GMAIL_PORT_FALLBACK = _env_bool('SMTP_ENABLE_GMAIL_PORT_FALLBACK', True)


# =============================================================================
# Logging
# =============================================================================

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '{asctime} {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': LOG_LEVEL,
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': os.getenv('DJANGO_LOG_LEVEL', 'WARNING'),
            'propagate': False,
        },
    },
}
