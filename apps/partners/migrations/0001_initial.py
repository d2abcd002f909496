import uuid

import django.core.validators
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
            name="Partner",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="Updated at")),
                ("name", models.CharField(max_length=200, verbose_name="Contact name")),
                ("email", models.EmailField(max_length=254, verbose_name="E-mail")),
                ("company", models.CharField(max_length=300, verbose_name="Company")),
                ("industry", models.CharField(max_length=100, verbose_name="Industry")),
                (
                    "services",
                    models.JSONField(
                        blank=True,
                        default=list,
                        help_text='["ERP Implementation", "Accounting"]',
                        verbose_name="Services offered",
                    ),
                ),
                ("hourly_rate_min", models.PositiveIntegerField(default=75, verbose_name="Hourly rate (min)")),
                ("hourly_rate_max", models.PositiveIntegerField(default=250, verbose_name="Hourly rate (max)")),
                (
                    "capacity",
                    models.CharField(
                        choices=[("available", "Available"), ("limited", "Limited"), ("full", "Fully booked")],
                        default="available",
                        max_length=20,
                        verbose_name="Capacity",
                    ),
                ),
                (
                    "rating",
                    models.PositiveSmallIntegerField(
                        default=5,
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(5),
                        ],
                        verbose_name="Rating (1-5)",
                    ),
                ),
                ("review_count", models.PositiveIntegerField(default=0, verbose_name="Reviews")),
                ("verified", models.BooleanField(default=False, verbose_name="Verified")),
                ("certifications", models.JSONField(blank=True, default=list, verbose_name="Certifications")),
                ("description", models.TextField(blank=True, verbose_name="Description")),
                ("website", models.URLField(blank=True, verbose_name="Website")),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="partner_profile",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Partner",
                "verbose_name_plural": "Partners",
                "ordering": ["created_at"],
            },
        ),
    ]
