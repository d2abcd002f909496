"""Client domain models."""
from django.conf import settings
from django.db import models

from apps.core.models import TimeStampedModel


class Client(TimeStampedModel):
    """Company looking for an Odoo implementation partner."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="client_profile"
    )
    name = models.CharField("Contact name", max_length=200)
    email = models.EmailField("E-mail")
    company = models.CharField("Company", max_length=300)
    industry = models.CharField("Industry", max_length=100)
    company_size = models.CharField("Company size", max_length=50, blank=True)
    budget = models.CharField("Budget range", max_length=100, blank=True)
    project_timeline = models.CharField("Project timeline", max_length=100, blank=True)
    odoo_modules = models.JSONField("Odoo modules of interest", default=list, blank=True)

    class Meta:
        verbose_name = "Client"
        verbose_name_plural = "Clients"
        ordering = ["company"]

    def __str__(self):
        return f"{self.company} ({self.name})"


class Brief(TimeStampedModel):
    """Project request submitted by a client; the input to partner matching."""

    class Priority(models.TextChoices):
        LOW = "low", "Low"
        MEDIUM = "medium", "Medium"
        HIGH = "high", "High"
        URGENT = "urgent", "Urgent"

    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        ACTIVE = "active", "Active"
        MATCHING = "matching", "Matching"
        COMPLETED = "completed", "Completed"
        ARCHIVED = "archived", "Archived"

    client = models.ForeignKey(Client, on_delete=models.CASCADE, related_name="briefs")
    title = models.CharField("Title", max_length=300)
    description = models.TextField("Description", blank=True)
    modules = models.JSONField(
        "Required modules", default=list, blank=True,
        help_text='["CRM", "Accounting"]',
    )
    pain_points = models.TextField("Pain points", blank=True)
    integrations = models.TextField("Integrations", blank=True)
    budget = models.CharField(
        "Budget", max_length=100, blank=True,
        help_text="Range or amount, e.g. $50,000 - $100,000",
    )
    timeline_weeks = models.PositiveSmallIntegerField("Timeline (weeks)", null=True, blank=True)
    priority = models.CharField(
        "Priority", max_length=10, choices=Priority.choices, default=Priority.MEDIUM
    )
    status = models.CharField(
        "Status", max_length=20, choices=Status.choices, default=Status.ACTIVE
    )

    class Meta:
        verbose_name = "Brief"
        verbose_name_plural = "Briefs"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.title} — {self.client.company}"
