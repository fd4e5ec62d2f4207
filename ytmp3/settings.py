"""
Django settings for the ytmp3 project.

Everything deployment-specific is read from the environment so the same
settings module works for runserver, the test suite and a WSGI deploy.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent


def _env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'django-insecure-ytmp3-dev-key-change-me')

DEBUG = _env_bool('DJANGO_DEBUG', True)

ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1').split(',')
    if host.strip()
]


INSTALLED_APPS = [
    'django.contrib.staticfiles',
    'audio',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'ytmp3.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.template.context_processors.csrf',
            ],
        },
    },
]

WSGI_APPLICATION = 'ytmp3.wsgi.application'

# No models; downloaded files on disk are the only state.
DATABASES = {}

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = False
USE_TZ = True

STATIC_URL = 'static/'

# Conversions run inside the request, so keep POST bodies small.
DATA_UPLOAD_MAX_MEMORY_SIZE = 64 * 1024


# ytmp3 settings

# Directory holding converted MP3s and their thumbnails
YTMP3_MEDIA_DIR = Path(os.environ.get('YTMP3_MEDIA_DIR', BASE_DIR / 'media'))

# Bitrate passed to ffmpeg as -b:a
YTMP3_AUDIO_BITRATE = os.environ.get('YTMP3_AUDIO_BITRATE', '192k')

# Proxy for yt-dlp (cloud VMs are often blocked by YouTube)
YTMP3_YTDLP_PROXY = os.environ.get('YTMP3_YTDLP_PROXY', '')

# Extra yt-dlp CLI-style arguments, e.g. '--format "bestaudio[ext=m4a]"'
YTMP3_YTDLP_EXTRA_ARGS = os.environ.get('YTMP3_YTDLP_EXTRA_ARGS', '')

# Extra ffmpeg arguments appended before the output path
YTMP3_FFMPEG_EXTRA_ARGS = os.environ.get('YTMP3_FFMPEG_EXTRA_ARGS', '')

# Seconds to wait for the thumbnail host
YTMP3_THUMBNAIL_TIMEOUT = int(os.environ.get('YTMP3_THUMBNAIL_TIMEOUT', '15'))

YTMP3_LOG_LEVEL = os.environ.get('YTMP3_LOG_LEVEL', 'INFO')


LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '[{asctime}] {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'loggers': {
        'audio': {
            'handlers': ['console'],
            'level': YTMP3_LOG_LEVEL,
            'propagate': False,
        },
        'django': {
            'handlers': ['console'],
            'level': 'INFO',
        },
    },
}
