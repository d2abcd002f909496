"""Development settings: local Postgres, inline Celery, chatty matching logs."""
from .base import *  # noqa: F401,F403
from .base import env

DEBUG = True
ALLOWED_HOSTS = ["*"]

# Rescoring runs inside the request unless a worker is started
CELERY_TASK_ALWAYS_EAGER = env.bool("CELERY_TASK_ALWAYS_EAGER", default=True)

REST_FRAMEWORK = {
    **REST_FRAMEWORK,  # noqa: F405
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
        "rest_framework.renderers.BrowsableAPIRenderer",
    ],
}

MATCHING_MAX_TRANSITION_ATTEMPTS = env.int("MATCHING_MAX_TRANSITION_ATTEMPTS", default=3)

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "dev": {
            "format": "{asctime} {levelname:<7} {name}:{lineno} {message}",
            "datefmt": "%H:%M:%S",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "dev",
        },
    },
    "root": {"handlers": ["console"], "level": "INFO"},
    "loggers": {
        "apps.matching": {"level": "DEBUG"},
        "apps.messaging": {"level": "DEBUG"},
        "django.db.backends": {"level": env("DJANGO_SQL_LOG_LEVEL", default="WARNING")},
    },
}
