"""
Django settings for the Singal Bucks tablet server.

Order data lives in DynamoDB (see aws_config.py); Django keeps no
database of its own.
"""

from pathlib import Path
import os

import aws_config

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent


# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.getenv('SECRET_KEY', 'django-insecure-singalbucks-local-tablets-only')

# SECURITY WARNING: don't run with debug turned on in production!
DEBUG = os.getenv('DEBUG', 'True').lower() == 'true'

ALLOWED_HOSTS = os.getenv('ALLOWED_HOSTS', '*').split(',')


# Application definition
INSTALLED_APPS = [
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'cafe.apps.CafeConfig',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'singalbucks.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'singalbucks.wsgi.application'

# No relational database: every order goes to DynamoDB.
DATABASES = {}

# Alerts travel in a cookie since there is no session table.
MESSAGE_STORAGE = 'django.contrib.messages.storage.cookie.CookieStorage'


# Internationalization
LANGUAGE_CODE = 'ko-kr'
TIME_ZONE = os.getenv('TIME_ZONE', 'Asia/Seoul')
USE_I18N = True
USE_TZ = True


# Static files
STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'


# =============================================================================
# DYNAMODB
# =============================================================================
CAFE_ORDERS_TABLE = aws_config.ORDERS_TABLE
CAFE_COUNTERS_TABLE = aws_config.COUNTERS_TABLE

# Seconds between polls for the connection monitor and order feed
CAFE_POLL_INTERVAL = float(os.getenv('CAFE_POLL_INTERVAL', '2'))


# =============================================================================
# LOGGING
# =============================================================================
LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '[{asctime}] {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'loggers': {
        'cafe': {
            'handlers': ['console'],
            'level': os.getenv('CAFE_LOG_LEVEL', 'INFO'),
            'propagate': False,
        },
        'aws_lib': {
            'handlers': ['console'],
            'level': 'INFO',
            'propagate': False,
        },
        'django': {
            'handlers': ['console'],
            'level': 'INFO',
        },
    },
}
