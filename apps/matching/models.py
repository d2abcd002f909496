"""Matching: client x partner relationship and its mutual-interest signals."""
from django.db import models

from apps.clients.models import Brief, Client
from apps.core.models import TimeStampedModel
from apps.partners.models import Partner


class Decision(models.TextChoices):
    """One side's answer about the other. Undecided is explicit, never None."""

    UNDECIDED = "undecided", "Undecided"
    ACCEPTED = "accepted", "Accepted"
    DECLINED = "declined", "Declined"

    @classmethod
    def from_bool(cls, value: bool) -> "Decision":
        return cls.ACCEPTED if value else cls.DECLINED


class Match(TimeStampedModel):
    """Relationship between one client (optionally via a brief) and one partner.

    ``status`` is derived from the two decisions by
    ``apps.matching.state.derive_status`` and only ever written there.
    """

    class Status(models.TextChoices):
        SUGGESTED = "suggested", "Suggested"
        ACCEPTED = "accepted", "Accepted"
        REJECTED = "rejected", "Rejected"
        CONVERTED = "converted", "Converted"

    client = models.ForeignKey(Client, on_delete=models.CASCADE, related_name="matches")
    partner = models.ForeignKey(Partner, on_delete=models.CASCADE, related_name="matches")
    brief = models.ForeignKey(
        Brief, on_delete=models.SET_NULL, null=True, blank=True, related_name="matches"
    )
    score = models.PositiveSmallIntegerField(
        "Score (0-100)", null=True, blank=True,
        help_text="0 = no fit, 100 = perfect fit",
    )
    score_breakdown = models.JSONField(
        "Score breakdown", default=dict, blank=True,
        help_text='{"moduleFit": 50, "industryMatch": 100, ...}',
    )
    reasons = models.JSONField("Reasons", default=list, blank=True)

    client_decision = models.CharField(
        "Client decision", max_length=10, choices=Decision.choices, default=Decision.UNDECIDED
    )
    partner_decision = models.CharField(
        "Partner decision", max_length=10, choices=Decision.choices, default=Decision.UNDECIDED
    )
    status = models.CharField(
        "Status", max_length=10, choices=Status.choices, default=Status.SUGGESTED
    )
    version = models.PositiveIntegerField("Version", default=0)

    # Pipeline (after a mutual match)
    expected_revenue = models.DecimalField(
        "Expected revenue", max_digits=12, decimal_places=2, null=True, blank=True
    )
    expected_closing_date = models.DateField("Expected closing date", null=True, blank=True)
    partner_notes = models.TextField("Partner notes", blank=True)
    responded_at = models.DateTimeField("Partner responded at", null=True, blank=True)

    class Meta:
        verbose_name = "Match"
        verbose_name_plural = "Matches"
        constraints = [
            models.UniqueConstraint(fields=["client", "partner"], name="unique_client_partner_match"),
        ]
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.client.company} ↔ {self.partner.company} ({self.status})"

    @property
    def client_liked(self):
        if self.client_decision == Decision.UNDECIDED:
            return None
        return self.client_decision == Decision.ACCEPTED

    @property
    def partner_responded(self) -> bool:
        return self.partner_decision != Decision.UNDECIDED

    @property
    def partner_accepted(self):
        if self.partner_decision == Decision.UNDECIDED:
            return None
        return self.partner_decision == Decision.ACCEPTED

    @property
    def is_mutual(self) -> bool:
        return self.status in (self.Status.ACCEPTED, self.Status.CONVERTED)
