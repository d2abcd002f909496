"""Match state machine — client/partner decisions and the derived status.

Status is a pure function of the two decisions (plus the sticky "converted"
flag), evaluated inside every write:

    client      partner     status
    --------    --------    ---------
    declined    any         rejected
    any         declined    rejected
    accepted    accepted    accepted
    otherwise               suggested

Writes are optimistic compare-and-set on ``Match.version``; a lost race is
re-read and recomputed up to ``MATCHING_MAX_TRANSITION_ATTEMPTS`` times.
"""
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation

from django.conf import settings
from django.utils import timezone
from django.utils.dateparse import parse_date

from apps.core.exceptions import AuthorizationError, ConcurrencyConflict, ValidationError

from .models import Decision, Match
from .repository import DjangoMatchRepository, MatchRepository
from .scoring import score_partner

logger = logging.getLogger(__name__)

PIPELINE_FIELDS = ("expected_revenue", "expected_closing_date", "partner_notes")
SIGNAL_FIELDS = ("client_liked", "partner_accepted")


def derive_status(client_decision, partner_decision, converted: bool = False) -> str:
    if client_decision == Decision.DECLINED or partner_decision == Decision.DECLINED:
        return Match.Status.REJECTED
    if client_decision == Decision.ACCEPTED and partner_decision == Decision.ACCEPTED:
        return Match.Status.CONVERTED if converted else Match.Status.ACCEPTED
    return Match.Status.SUGGESTED


@dataclass
class Transition:
    match: Match
    matched: bool = False


class MatchStateMachine:
    def __init__(self, repository: MatchRepository = None, max_attempts: int = None):
        self.repository = repository or DjangoMatchRepository()
        self.max_attempts = max_attempts or settings.MATCHING_MAX_TRANSITION_ATTEMPTS

    # ── Decisions ───────────────────────────────────────

    def record_client_decision(self, client_id, partner_id, liked: bool, actor, brief=None) -> Transition:
        """Find-or-create the (client, partner) match and set the client's decision."""
        client = self.repository.get_client(client_id)
        if not _is_user(actor, client.user_id):
            raise AuthorizationError("Only the client can decide on its own matches")
        partner = self.repository.get_partner(partner_id)
        decision = Decision.from_bool(_require_bool("liked", liked))

        defaults = {
            "client_decision": decision,
            "status": derive_status(decision, Decision.UNDECIDED),
        }
        if brief is None:
            brief = self.repository.latest_brief(client.pk)
        if brief is not None:
            result = score_partner(brief, partner, client.industry)
            defaults.update(
                brief=brief,
                score=result.score,
                score_breakdown=result.breakdown,
                reasons=result.reasons,
            )

        match, created = self.repository.get_or_create_match(client.pk, partner.pk, defaults)
        if created:
            logger.info("Match %s created by client swipe (%s)", match.pk, decision)
            return Transition(match, matched=False)

        return self._transition(
            match.pk,
            authorize=lambda m: None,
            plan=lambda m: _plan(m, client_decision=decision),
        )

    def record_partner_decision(self, match_id, accepted: bool, actor) -> Transition:
        decision = Decision.from_bool(_require_bool("accepted", accepted))

        def authorize(match):
            if not _is_user(actor, match.partner.user_id):
                raise AuthorizationError("Only the matched partner can respond to this match")

        return self._transition(
            match_id,
            authorize=authorize,
            plan=lambda m: _plan(m, partner_decision=decision),
        )

    # ── Pipeline ────────────────────────────────────────

    def update_match(self, match_id, changes: dict, actor) -> Transition:
        """Patch pipeline fields and/or decisions; status is always recomputed."""
        unknown = sorted(set(changes) - set(PIPELINE_FIELDS) - set(SIGNAL_FIELDS))
        if unknown:
            raise ValidationError(
                "Fields cannot be updated",
                detail={name: "This field cannot be updated." for name in unknown},
            )
        values = _clean_pipeline(changes)
        client_decision = partner_decision = None
        if "client_liked" in changes:
            client_decision = Decision.from_bool(_require_bool("client_liked", changes["client_liked"]))
        if "partner_accepted" in changes:
            partner_decision = Decision.from_bool(
                _require_bool("partner_accepted", changes["partner_accepted"])
            )

        def authorize(match):
            is_client = _is_user(actor, match.client.user_id)
            is_partner = _is_user(actor, match.partner.user_id)
            if not (is_client or is_partner):
                raise AuthorizationError("Not a party to this match")
            if client_decision is not None and not is_client:
                raise AuthorizationError("Only the client can change client_liked")
            if partner_decision is not None and not is_partner:
                raise AuthorizationError("Only the partner can change partner_accepted")

        return self._transition(
            match_id,
            authorize=authorize,
            plan=lambda m: _plan(
                m, client_decision=client_decision, partner_decision=partner_decision, extra=values
            ),
        )

    def convert_match(self, match_id, actor) -> Transition:
        """accepted -> converted, driven by a project being created."""

        def authorize(match):
            if not (_is_user(actor, match.client.user_id) or _is_user(actor, match.partner.user_id)):
                raise AuthorizationError("Not a party to this match")

        def plan(match):
            if match.status == Match.Status.CONVERTED:
                return {}
            if match.status != Match.Status.ACCEPTED:
                raise ValidationError(
                    "Only a mutual match can be converted",
                    detail={"status": f"Match is {match.status}."},
                )
            return {"status": derive_status(match.client_decision, match.partner_decision, converted=True)}

        return self._transition(match_id, authorize=authorize, plan=plan)

    # ── Internals ───────────────────────────────────────

    def _transition(self, match_id, authorize, plan) -> Transition:
        for attempt in range(1, self.max_attempts + 1):
            match = self.repository.get_match(match_id)
            authorize(match)
            fields = plan(match)
            if not fields:
                return Transition(match, matched=False)

            previous = match.status
            if self.repository.compare_and_set(match, fields):
                matched = previous != Match.Status.ACCEPTED and match.status == Match.Status.ACCEPTED
                logger.info(
                    "Match %s: %s -> %s (client=%s, partner=%s, matched=%s)",
                    match.pk, previous, match.status,
                    match.client_decision, match.partner_decision, matched,
                )
                return Transition(match, matched=matched)

            logger.warning(
                "Match %s: version %s is stale, retrying (%d/%d)",
                match_id, match.version, attempt, self.max_attempts,
            )
        raise ConcurrencyConflict(f"Match {match_id} kept changing; gave up after {self.max_attempts} attempts")


def _plan(match, client_decision=None, partner_decision=None, extra=None) -> dict:
    """Fields to write for the requested decisions, or {} when nothing changes."""
    new_client = client_decision or match.client_decision
    new_partner = partner_decision or match.partner_decision
    converted = match.status == Match.Status.CONVERTED

    if converted and (new_client, new_partner) != (match.client_decision, match.partner_decision):
        raise ValidationError(
            "Match was already converted into a project",
            detail={"status": "Decisions on a converted match are final."},
        )

    fields = {
        name: value for name, value in (extra or {}).items()
        if getattr(match, name) != value
    }
    if new_client != match.client_decision:
        fields["client_decision"] = new_client
    if new_partner != match.partner_decision:
        fields["partner_decision"] = new_partner
        fields["responded_at"] = timezone.now()

    status = derive_status(new_client, new_partner, converted=converted)
    if status != match.status:
        fields["status"] = status
    return fields


def _is_user(actor, user_id) -> bool:
    return actor is not None and getattr(actor, "pk", None) is not None and actor.pk == user_id


def _require_bool(name: str, value) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{name} must be a boolean", detail={name: "Must be true or false."})
    return value


def _clean_pipeline(changes: dict) -> dict:
    values = {}
    errors = {}
    if "expected_revenue" in changes:
        raw = changes["expected_revenue"]
        if raw is None or raw == "":
            values["expected_revenue"] = None
        else:
            try:
                amount = Decimal(str(raw))
            except (InvalidOperation, ValueError):
                amount = None
            if amount is None or not amount.is_finite():
                errors["expected_revenue"] = "Must be a number."
            else:
                values["expected_revenue"] = amount.quantize(Decimal("0.01"))
    if "expected_closing_date" in changes:
        raw = changes["expected_closing_date"]
        if raw is None or raw == "":
            values["expected_closing_date"] = None
        elif isinstance(raw, date):
            values["expected_closing_date"] = raw
        else:
            try:
                parsed = parse_date(str(raw))
            except ValueError:
                parsed = None
            if parsed is None:
                errors["expected_closing_date"] = "Must be a date (YYYY-MM-DD)."
            values["expected_closing_date"] = parsed
    if "partner_notes" in changes:
        values["partner_notes"] = changes["partner_notes"] or ""
    if errors:
        raise ValidationError("Invalid pipeline fields", detail=errors)
    return values
