"""Projects: the engagement that follows a mutual match."""
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from apps.clients.models import Client
from apps.core.models import TimeStampedModel
from apps.matching.models import Match
from apps.partners.models import Partner


class Project(TimeStampedModel):
    class Status(models.TextChoices):
        MATCHED = "matched", "Matched"
        IN_PROGRESS = "in_progress", "In progress"
        COMPLETED = "completed", "Completed"
        CANCELLED = "cancelled", "Cancelled"

    match = models.OneToOneField(Match, on_delete=models.PROTECT, related_name="project")
    client = models.ForeignKey(Client, on_delete=models.CASCADE, related_name="projects")
    partner = models.ForeignKey(Partner, on_delete=models.CASCADE, related_name="projects")
    title = models.CharField("Title", max_length=300)
    status = models.CharField(
        "Status", max_length=20, choices=Status.choices, default=Status.MATCHED
    )
    contract_value = models.DecimalField(
        "Contract value", max_digits=12, decimal_places=2, null=True, blank=True
    )
    start_date = models.DateField("Start date", null=True, blank=True)
    end_date = models.DateField("End date", null=True, blank=True)
    client_satisfaction = models.PositiveSmallIntegerField(
        "Client satisfaction (1-5)", null=True, blank=True,
        validators=[MinValueValidator(1), MaxValueValidator(5)],
    )

    class Meta:
        verbose_name = "Project"
        verbose_name_plural = "Projects"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.title} ({self.get_status_display()})"
