"""Shared fixtures for tests."""
import pytest
from rest_framework.test import APIClient

from apps.clients.models import Brief, Client
from apps.partners.models import Partner


@pytest.fixture
def client_user(db, django_user_model):
    return django_user_model.objects.create_user(username="client", password="testpass123")


@pytest.fixture
def partner_user(db, django_user_model):
    return django_user_model.objects.create_user(username="partner", password="testpass123")


@pytest.fixture
def outsider(db, django_user_model):
    return django_user_model.objects.create_user(username="outsider", password="testpass123")


@pytest.fixture
def sample_client(db, client_user):
    """Retail company looking for CRM + Accounting."""
    return Client.objects.create(
        user=client_user,
        name="Ana Souza",
        email="ana@acme.test",
        company="Acme Retail",
        industry="Retail",
        budget="$50,000 - $100,000",
        odoo_modules=["CRM", "Accounting"],
    )


@pytest.fixture
def sample_partner(db, partner_user):
    return Partner.objects.create(
        user=partner_user,
        name="Marcus Johnson",
        email="marcus@retailflow.test",
        company="RetailFlow Partners",
        industry="Retail",
        services=["CRM Implementation", "Sales"],
        hourly_rate_min=100,
        hourly_rate_max=150,
        capacity=Partner.Capacity.AVAILABLE,
        rating=5,
        review_count=63,
        verified=True,
    )


@pytest.fixture
def make_partner(db, django_user_model):
    """Factory for extra partners with their own users."""
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        n = counter["n"]
        user = django_user_model.objects.create_user(username=f"partner{n}", password="testpass123")
        fields = {
            "name": f"Partner {n}",
            "email": f"partner{n}@example.test",
            "company": f"Partner Co {n}",
            "industry": "Technology",
            "services": ["ERP Implementation"],
            "hourly_rate_min": 100,
            "hourly_rate_max": 150,
            "capacity": Partner.Capacity.AVAILABLE,
            "rating": 4,
        }
        fields.update(overrides)
        return Partner.objects.create(user=user, **fields)

    return _make


@pytest.fixture
def sample_brief(db, sample_client):
    return Brief.objects.create(
        client=sample_client,
        title="CRM and accounting rollout",
        description="Replace spreadsheets with Odoo CRM and Accounting",
        modules=["CRM", "Accounting"],
        budget="$50,000 - $100,000",
        timeline_weeks=12,
        priority=Brief.Priority.HIGH,
    )


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_api(api_client, client_user):
    api_client.force_authenticate(user=client_user)
    return api_client


@pytest.fixture
def partner_api(partner_user):
    api = APIClient()
    api.force_authenticate(user=partner_user)
    return api
