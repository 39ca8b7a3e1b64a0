import os
import sys
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / ".env", override=True)

SECRET_KEY = os.getenv("SECRET_KEY", "django-insecure-metflix-dev-key")

DEBUG = os.getenv("DEBUG", "False").lower() == "true"

ALLOWED_HOSTS = os.getenv("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")


# Application definition

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "django.contrib.sessions",
    "django.contrib.staticfiles",
    "rest_framework",
    "drf_yasg",
    "corsheaders",
    "catalog",
    "watchlist",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
            ],
        },
    },
]

WSGI_APPLICATION = "config.wsgi.application"

# Database: каталог и список 'Буду смотреть' в БД не хранятся

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

if "test" in sys.argv:
    DATABASES["default"]["NAME"] = BASE_DIR / "test_bd.sqlite3"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Sessions: список 'Буду смотреть' живет в подписанной cookie браузера

SESSION_ENGINE = "django.contrib.sessions.backends.signed_cookies"
SESSION_COOKIE_HTTPONLY = True
SESSION_COOKIE_AGE = 60 * 60 * 24 * 365  # 1 год
WATCHLIST_SESSION_KEY = "watchlist"
# браузеры отбрасывают cookie больше 4096 байт вместе с именем и атрибутами
WATCHLIST_MAX_COOKIE_BYTES = 3800

# Internationalization

LANGUAGE_CODE = "en-us"

TIME_ZONE = "UTC"

USE_I18N = True
USE_TZ = True

STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# TMDB

TMDB_API_KEY = os.getenv("TMDB_API_KEY")
TMDB_BASE_URL = "https://api.themoviedb.org/3"
TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p"
TMDB_LANGUAGE = os.getenv("TMDB_LANGUAGE", "en-US")
TMDB_TIMEOUT = int(os.getenv("TMDB_TIMEOUT", "5"))
TMDB_RETRIES = int(os.getenv("TMDB_RETRIES", "1"))  # 1 - без повторов
TMDB_CACHE_ENABLED = os.getenv("TMDB_CACHE_ENABLED", "False").lower() == "true"

# Пагинация каталога: страницы TMDB по 20 элементов собираются в страницы приложения по 28

TMDB_PAGE_SIZE = 20
TMDB_MAX_PAGES = 500
CATALOG_WINDOW_SIZE = 28
CATALOG_WINDOW_EXTEND_FOR_OFFSET = os.getenv("CATALOG_WINDOW_EXTEND_FOR_OFFSET", "False").lower() == "true"

# Caches settings

CACHE_LOCATION = os.getenv("CACHE_LOCATION")
if CACHE_LOCATION:
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.redis.RedisCache",
            "LOCATION": CACHE_LOCATION,
        }
    }
else:
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
            "LOCATION": "metflix",
        }
    }

# Rest_framework settings

REST_FRAMEWORK = {
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.AllowAny",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
}

SWAGGER_USE_COMPAT_RENDERERS = False

# CORS

CORS_ALLOWED_ORIGINS = os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:3000").split(",")
CORS_ALLOW_CREDENTIALS = True

CSRF_TRUSTED_ORIGINS = CORS_ALLOWED_ORIGINS


# logging settings

LOG_LEVEL = os.getenv("DJANGO_LOG_LEVEL", "INFO")
LOG_DIR = BASE_DIR / "logs"
LOG_DIR.mkdir(exist_ok=True)

LOG_HANDLERS = {
    "console": {
        "class": "logging.StreamHandler",
        "formatter": "simple",
        "level": LOG_LEVEL,
    },
    "file_app": {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "verbose",
        "level": LOG_LEVEL,
        "filename": LOG_DIR / "app.log",
        "maxBytes": 5 * 1024 * 1024,
        "backupCount": 3,
        "encoding": "utf-8",
    },
}

MODULE_HANDLERS = {
    "catalog": LOG_DIR / "catalog.log",
    "watchlist": LOG_DIR / "watchlist.log",
}

for name, filename in MODULE_HANDLERS.items():
    LOG_HANDLERS[f"file_{name}"] = {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": "verbose",
        "level": LOG_LEVEL,
        "filename": filename,
        "maxBytes": 5 * 1024 * 1024,
        "backupCount": 3,
        "encoding": "utf-8",
    }

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,

    "formatters": {
        "verbose": {
            "format": "%(asctime)s | %(levelname)-8s | %(name)s | %(pathname)s:%(lineno)d | %(message)s",
        },
        "simple": {
            "format": "%(levelname)s | %(name)s | %(message)s",
        },
    },

    "handlers": LOG_HANDLERS,

    "root": {
        "handlers": ["console", "file_app"],
        "level": LOG_LEVEL,
    },

    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": "WARNING",
            "propagate": True,
        },
        "django.request": {          # 404/500 ошибки
            "handlers": ["file_app"],
            "level": "ERROR",
            "propagate": False,
        },

        "metflix.catalog": {"handlers": ["console", "file_catalog"], "level": LOG_LEVEL, "propagate": False},
        "metflix.watchlist": {"handlers": ["console", "file_watchlist"], "level": LOG_LEVEL, "propagate": False},
    },
}
