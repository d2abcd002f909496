import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("clients", "0001_initial"),
        ("partners", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Match",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                (
                    "score",
                    models.PositiveSmallIntegerField(
                        blank=True, help_text="0 = no fit, 100 = perfect fit", null=True, verbose_name="Score (0-100)"
                    ),
                ),
                (
                    "score_breakdown",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        help_text='{"moduleFit": 50, "industryMatch": 100, ...}',
                        verbose_name="Score breakdown",
                    ),
                ),
                ("reasons", models.JSONField(blank=True, default=list, verbose_name="Reasons")),
                (
                    "client_decision",
                    models.CharField(
                        choices=[("undecided", "Undecided"), ("accepted", "Accepted"), ("declined", "Declined")],
                        default="undecided",
                        max_length=10,
                        verbose_name="Client decision",
                    ),
                ),
                (
                    "partner_decision",
                    models.CharField(
                        choices=[("undecided", "Undecided"), ("accepted", "Accepted"), ("declined", "Declined")],
                        default="undecided",
                        max_length=10,
                        verbose_name="Partner decision",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("suggested", "Suggested"),
                            ("accepted", "Accepted"),
                            ("rejected", "Rejected"),
                            ("converted", "Converted"),
                        ],
                        default="suggested",
                        max_length=10,
                        verbose_name="Status",
                    ),
                ),
                ("version", models.PositiveIntegerField(default=0, verbose_name="Version")),
                (
                    "expected_revenue",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=12, null=True, verbose_name="Expected revenue"
                    ),
                ),
                ("expected_closing_date", models.DateField(blank=True, null=True, verbose_name="Expected closing date")),
                ("partner_notes", models.TextField(blank=True, verbose_name="Partner notes")),
                ("responded_at", models.DateTimeField(blank=True, null=True, verbose_name="Partner responded at")),
                (
                    "brief",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="matches",
                        to="clients.brief",
                    ),
                ),
                (
                    "client",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="matches", to="clients.client"
                    ),
                ),
                (
                    "partner",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="matches", to="partners.partner"
                    ),
                ),
            ],
            options={
                "verbose_name": "Match",
                "verbose_name_plural": "Matches",
                "ordering": ["-created_at"],
                "constraints": [
                    models.UniqueConstraint(fields=("client", "partner"), name="unique_client_partner_match"),
                ],
            },
        ),
    ]
