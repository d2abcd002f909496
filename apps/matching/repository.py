"""Storage port for the matching core.

The scoring/generation/state services only talk to ``MatchRepository``; the
Django ORM implementation below is the one wired in by default.
"""
from abc import ABC, abstractmethod
from typing import Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from apps.clients.models import Brief, Client
from apps.core.exceptions import NotFoundError
from apps.partners.models import Partner

from .models import Decision, Match


class MatchRepository(ABC):
    """Create/read/update access to clients, partners, briefs and matches."""

    @abstractmethod
    def get_client(self, client_id) -> Client:
        """Raises NotFoundError when missing."""

    @abstractmethod
    def get_partner(self, partner_id) -> Partner:
        """Raises NotFoundError when missing."""

    @abstractmethod
    def all_partners(self) -> list[Partner]:
        pass

    @abstractmethod
    def latest_brief(self, client_id) -> Optional[Brief]:
        pass

    @abstractmethod
    def get_match(self, match_id) -> Match:
        """Raises NotFoundError when missing."""

    @abstractmethod
    def get_or_create_match(self, client_id, partner_id, defaults: dict) -> tuple[Match, bool]:
        """Find the (client, partner) match or create it from ``defaults``."""

    @abstractmethod
    def compare_and_set(self, match: Match, fields: dict) -> bool:
        """Write ``fields`` only if the stored version still equals ``match.version``.

        On success the in-memory ``match`` reflects the write (fields applied,
        version bumped). On failure nothing is written and ``match`` is untouched.
        """

    @abstractmethod
    def matches_for_client(self, client_id) -> list[Match]:
        pass

    @abstractmethod
    def matches_for_partner(self, partner_id) -> list[Match]:
        pass

    @abstractmethod
    def partners_without_match(self, client_id) -> list[Partner]:
        pass

    @abstractmethod
    def pending_for_partner(self, partner_id) -> list[Match]:
        """Matches the client wants and the partner has not answered yet."""


class DjangoMatchRepository(MatchRepository):
    def get_client(self, client_id) -> Client:
        try:
            return Client.objects.get(pk=client_id)
        except (Client.DoesNotExist, DjangoValidationError, ValueError, TypeError):
            raise NotFoundError(f"Client {client_id} not found")

    def get_partner(self, partner_id) -> Partner:
        try:
            return Partner.objects.get(pk=partner_id)
        except (Partner.DoesNotExist, DjangoValidationError, ValueError, TypeError):
            raise NotFoundError(f"Partner {partner_id} not found")

    def all_partners(self) -> list[Partner]:
        return list(Partner.objects.order_by("created_at"))

    def latest_brief(self, client_id) -> Optional[Brief]:
        return Brief.objects.filter(client_id=client_id).order_by("-created_at").first()

    def get_match(self, match_id) -> Match:
        try:
            return Match.objects.select_related("client", "partner", "brief").get(pk=match_id)
        except (Match.DoesNotExist, DjangoValidationError, ValueError, TypeError):
            raise NotFoundError(f"Match {match_id} not found")

    def get_or_create_match(self, client_id, partner_id, defaults: dict) -> tuple[Match, bool]:
        with transaction.atomic():
            match, created = Match.objects.get_or_create(
                client_id=client_id, partner_id=partner_id, defaults=defaults
            )
        return match, created

    def compare_and_set(self, match: Match, fields: dict) -> bool:
        now = timezone.now()
        updated = Match.objects.filter(pk=match.pk, version=match.version).update(
            version=F("version") + 1, updated_at=now, **fields
        )
        if not updated:
            return False
        for name, value in fields.items():
            setattr(match, name, value)
        match.version += 1
        match.updated_at = now
        return True

    def matches_for_client(self, client_id) -> list[Match]:
        return list(
            Match.objects.filter(client_id=client_id)
            .select_related("client", "partner", "brief")
            .order_by("-created_at")
        )

    def matches_for_partner(self, partner_id) -> list[Match]:
        return list(
            Match.objects.filter(partner_id=partner_id)
            .select_related("client", "partner", "brief")
            .order_by("-created_at")
        )

    def partners_without_match(self, client_id) -> list[Partner]:
        return list(
            Partner.objects.exclude(matches__client_id=client_id).order_by("created_at")
        )

    def pending_for_partner(self, partner_id) -> list[Match]:
        return list(
            Match.objects.filter(
                partner_id=partner_id,
                client_decision=Decision.ACCEPTED,
                partner_decision=Decision.UNDECIDED,
            )
            .exclude(status=Match.Status.CONVERTED)
            .select_related("client", "partner", "brief")
            .order_by("-created_at")
        )
