"""Partner domain models."""
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from apps.core.models import TimeStampedModel


class Partner(TimeStampedModel):
    """Certified Odoo implementation partner."""

    class Capacity(models.TextChoices):
        AVAILABLE = "available", "Available"
        LIMITED = "limited", "Limited"
        FULL = "full", "Fully booked"

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="partner_profile"
    )
    name = models.CharField("Contact name", max_length=200)
    email = models.EmailField("E-mail")
    company = models.CharField("Company", max_length=300)
    industry = models.CharField("Industry", max_length=100)
    services = models.JSONField(
        "Services offered", default=list, blank=True,
        help_text='["ERP Implementation", "Accounting"]',
    )
    hourly_rate_min = models.PositiveIntegerField("Hourly rate (min)", default=75)
    hourly_rate_max = models.PositiveIntegerField("Hourly rate (max)", default=250)
    capacity = models.CharField(
        "Capacity", max_length=20, choices=Capacity.choices, default=Capacity.AVAILABLE
    )
    rating = models.PositiveSmallIntegerField(
        "Rating (1-5)", default=5,
        validators=[MinValueValidator(1), MaxValueValidator(5)],
    )
    review_count = models.PositiveIntegerField("Reviews", default=0)
    verified = models.BooleanField("Verified", default=False)
    certifications = models.JSONField("Certifications", default=list, blank=True)
    description = models.TextField("Description", blank=True)
    website = models.URLField("Website", blank=True)

    class Meta:
        verbose_name = "Partner"
        verbose_name_plural = "Partners"
        ordering = ["created_at"]

    def __str__(self):
        return self.company

    @property
    def average_rate(self) -> float:
        return (self.hourly_rate_min + self.hourly_rate_max) / 2
