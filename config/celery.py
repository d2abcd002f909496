"""Celery configuration for PartnerMatch."""
import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.development")

app = Celery("partnermatch")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks()

# ── Named queues ────────────────────────────────────────
app.conf.task_routes = {
    "apps.matching.tasks.*": {"queue": "matching"},
}
