import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Client",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("name", models.CharField(max_length=200, verbose_name="Contact name")),
                ("email", models.EmailField(max_length=254, verbose_name="E-mail")),
                ("company", models.CharField(max_length=300, verbose_name="Company")),
                ("industry", models.CharField(max_length=100, verbose_name="Industry")),
                ("company_size", models.CharField(blank=True, max_length=50, verbose_name="Company size")),
                ("budget", models.CharField(blank=True, max_length=100, verbose_name="Budget range")),
                ("project_timeline", models.CharField(blank=True, max_length=100, verbose_name="Project timeline")),
                ("odoo_modules", models.JSONField(blank=True, default=list, verbose_name="Odoo modules of interest")),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="client_profile",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Client",
                "verbose_name_plural": "Clients",
                "ordering": ["company"],
            },
        ),
        migrations.CreateModel(
            name="Brief",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("title", models.CharField(max_length=300, verbose_name="Title")),
                ("description", models.TextField(blank=True, verbose_name="Description")),
                (
                    "modules",
                    models.JSONField(
                        blank=True, default=list, help_text='["CRM", "Accounting"]', verbose_name="Required modules"
                    ),
                ),
                ("pain_points", models.TextField(blank=True, verbose_name="Pain points")),
                ("integrations", models.TextField(blank=True, verbose_name="Integrations")),
                (
                    "budget",
                    models.CharField(
                        blank=True,
                        help_text="Range or amount, e.g. $50,000 - $100,000",
                        max_length=100,
                        verbose_name="Budget",
                    ),
                ),
                ("timeline_weeks", models.PositiveSmallIntegerField(blank=True, null=True, verbose_name="Timeline (weeks)")),
                (
                    "priority",
                    models.CharField(
                        choices=[("low", "Low"), ("medium", "Medium"), ("high", "High"), ("urgent", "Urgent")],
                        default="medium",
                        max_length=10,
                        verbose_name="Priority",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("draft", "Draft"),
                            ("active", "Active"),
                            ("matching", "Matching"),
                            ("completed", "Completed"),
                            ("archived", "Archived"),
                        ],
                        default="active",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                (
                    "client",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="briefs", to="clients.client"
                    ),
                ),
            ],
            options={
                "verbose_name": "Brief",
                "verbose_name_plural": "Briefs",
                "ordering": ["-created_at"],
            },
        ),
    ]
