"""Tests for the match state machine."""
import uuid
from datetime import date
from decimal import Decimal

import pytest
from django.db.models import F

from apps.core.exceptions import (
    AuthorizationError,
    ConcurrencyConflict,
    NotFoundError,
    ValidationError,
)
from apps.matching.models import Decision, Match
from apps.matching.repository import DjangoMatchRepository
from apps.matching.state import MatchStateMachine, derive_status

A, D, U = Decision.ACCEPTED, Decision.DECLINED, Decision.UNDECIDED


class TestDeriveStatus:
    @pytest.mark.parametrize("client,partner,expected", [
        (A, U, Match.Status.SUGGESTED),
        (U, U, Match.Status.SUGGESTED),
        (U, A, Match.Status.SUGGESTED),
        (A, A, Match.Status.ACCEPTED),
        (A, D, Match.Status.REJECTED),
        (U, D, Match.Status.REJECTED),
        (D, U, Match.Status.REJECTED),
        (D, A, Match.Status.REJECTED),
        (D, D, Match.Status.REJECTED),
    ])
    def test_truth_table(self, client, partner, expected):
        assert derive_status(client, partner) == expected

    def test_converted_is_sticky_for_mutual_match(self):
        assert derive_status(A, A, converted=True) == Match.Status.CONVERTED


@pytest.fixture
def machine():
    return MatchStateMachine()


@pytest.fixture
def open_match(db, sample_client, sample_partner):
    """Match created outside a brief flow: nobody has decided yet."""
    return Match.objects.create(client=sample_client, partner=sample_partner)


@pytest.mark.django_db
class TestMutualMatch:
    def test_client_first_then_partner(self, machine, sample_client, sample_partner, client_user, partner_user):
        first = machine.record_client_decision(sample_client.pk, sample_partner.pk, True, client_user)
        assert first.matched is False
        assert first.match.status == Match.Status.SUGGESTED

        second = machine.record_partner_decision(first.match.pk, True, partner_user)
        assert second.matched is True
        assert second.match.status == Match.Status.ACCEPTED
        assert second.match.responded_at is not None

    def test_partner_first_then_client(self, machine, open_match, sample_client, sample_partner,
                                       client_user, partner_user):
        first = machine.record_partner_decision(open_match.pk, True, partner_user)
        assert first.matched is False
        assert first.match.status == Match.Status.SUGGESTED

        second = machine.record_client_decision(sample_client.pk, sample_partner.pk, True, client_user)
        assert second.matched is True
        assert second.match.pk == open_match.pk
        assert Match.objects.get(pk=open_match.pk).status == Match.Status.ACCEPTED

    def test_repeat_accept_is_not_a_new_match(self, machine, sample_client, sample_partner,
                                              client_user, partner_user):
        match = machine.record_client_decision(sample_client.pk, sample_partner.pk, True, client_user).match
        assert machine.record_partner_decision(match.pk, True, partner_user).matched is True

        again = machine.record_partner_decision(match.pk, True, partner_user)

        assert again.matched is False
        assert again.match.status == Match.Status.ACCEPTED

    @pytest.mark.parametrize("client_liked,partner_accepted", [
        (False, True), (True, False), (False, False),
    ])
    @pytest.mark.parametrize("client_first", [True, False])
    def test_any_negative_rejects(self, machine, open_match, sample_client, sample_partner,
                                  client_user, partner_user, client_liked, partner_accepted, client_first):
        steps = [
            lambda: machine.record_client_decision(sample_client.pk, sample_partner.pk, client_liked, client_user),
            lambda: machine.record_partner_decision(open_match.pk, partner_accepted, partner_user),
        ]
        if not client_first:
            steps.reverse()
        results = [step() for step in steps]

        assert not any(result.matched for result in results)
        assert Match.objects.get(pk=open_match.pk).status == Match.Status.REJECTED


@pytest.mark.django_db
class TestClientDecision:
    def test_reswipe_does_not_duplicate(self, machine, sample_client, sample_partner, client_user):
        machine.record_client_decision(sample_client.pk, sample_partner.pk, True, client_user)
        machine.record_client_decision(sample_client.pk, sample_partner.pk, True, client_user)

        assert Match.objects.filter(client=sample_client, partner=sample_partner).count() == 1

    def test_change_of_mind(self, machine, sample_client, sample_partner, client_user):
        machine.record_client_decision(sample_client.pk, sample_partner.pk, True, client_user)
        result = machine.record_client_decision(sample_client.pk, sample_partner.pk, False, client_user)

        assert result.match.client_liked is False
        assert result.match.status == Match.Status.REJECTED

    def test_scored_against_latest_brief(self, machine, sample_brief, sample_partner, client_user):
        result = machine.record_client_decision(sample_brief.client.pk, sample_partner.pk, True, client_user)

        assert result.match.brief == sample_brief
        assert result.match.score == 81

    def test_without_brief_has_no_score(self, machine, sample_client, sample_partner, client_user):
        result = machine.record_client_decision(sample_client.pk, sample_partner.pk, True, client_user)
        assert result.match.score is None
        assert result.match.brief is None

    def test_only_the_client_can_swipe(self, machine, sample_client, sample_partner, partner_user):
        with pytest.raises(AuthorizationError):
            machine.record_client_decision(sample_client.pk, sample_partner.pk, True, partner_user)
        assert Match.objects.count() == 0

    def test_unknown_partner(self, machine, sample_client, client_user):
        with pytest.raises(NotFoundError):
            machine.record_client_decision(sample_client.pk, uuid.uuid4(), True, client_user)

    def test_liked_must_be_boolean(self, machine, sample_client, sample_partner, client_user):
        with pytest.raises(ValidationError):
            machine.record_client_decision(sample_client.pk, sample_partner.pk, "yes", client_user)


@pytest.mark.django_db
class TestPartnerDecision:
    def test_outsider_is_forbidden_and_nothing_changes(self, machine, open_match, outsider):
        with pytest.raises(AuthorizationError):
            machine.record_partner_decision(open_match.pk, True, outsider)

        stored = Match.objects.get(pk=open_match.pk)
        assert stored.partner_decision == Decision.UNDECIDED
        assert stored.responded_at is None
        assert stored.version == 0

    def test_client_cannot_answer_for_partner(self, machine, open_match, client_user):
        with pytest.raises(AuthorizationError):
            machine.record_partner_decision(open_match.pk, True, client_user)

    def test_anonymous_is_forbidden(self, machine, open_match):
        with pytest.raises(AuthorizationError):
            machine.record_partner_decision(open_match.pk, True, None)

    def test_unknown_match(self, machine, partner_user):
        with pytest.raises(NotFoundError):
            machine.record_partner_decision(uuid.uuid4(), True, partner_user)

    def test_malformed_id_is_not_found(self, machine, partner_user):
        with pytest.raises(NotFoundError):
            machine.record_partner_decision("not-a-uuid", True, partner_user)


@pytest.mark.django_db
class TestUpdateMatch:
    def test_pipeline_fields(self, machine, open_match, partner_user):
        result = machine.update_match(
            open_match.pk,
            {"expected_revenue": "45000", "expected_closing_date": "2026-12-01", "partner_notes": "Call Monday"},
            partner_user,
        )
        stored = Match.objects.get(pk=open_match.pk)
        assert stored.expected_revenue == Decimal("45000.00")
        assert stored.expected_closing_date == date(2026, 12, 1)
        assert stored.partner_notes == "Call Monday"
        assert result.match.status == Match.Status.SUGGESTED

    def test_status_cannot_be_written(self, machine, open_match, partner_user):
        with pytest.raises(ValidationError) as excinfo:
            machine.update_match(open_match.pk, {"status": "accepted"}, partner_user)
        assert "status" in excinfo.value.detail
        assert Match.objects.get(pk=open_match.pk).status == Match.Status.SUGGESTED

    def test_decisions_recompute_status(self, machine, open_match, client_user, partner_user):
        machine.update_match(open_match.pk, {"client_liked": True}, client_user)
        result = machine.update_match(open_match.pk, {"partner_accepted": True}, partner_user)

        assert result.matched is True
        assert result.match.status == Match.Status.ACCEPTED

    def test_partner_cannot_set_client_signal(self, machine, open_match, partner_user):
        with pytest.raises(AuthorizationError):
            machine.update_match(open_match.pk, {"client_liked": True}, partner_user)

    def test_outsider_forbidden(self, machine, open_match, outsider):
        with pytest.raises(AuthorizationError):
            machine.update_match(open_match.pk, {"partner_notes": "hi"}, outsider)
        assert Match.objects.get(pk=open_match.pk).partner_notes == ""

    def test_bad_values(self, machine, open_match, partner_user):
        with pytest.raises(ValidationError) as excinfo:
            machine.update_match(
                open_match.pk,
                {"expected_revenue": "lots", "expected_closing_date": "someday"},
                partner_user,
            )
        assert set(excinfo.value.detail) == {"expected_revenue", "expected_closing_date"}


@pytest.mark.django_db
class TestConvert:
    def _mutual(self, machine, client, partner, client_user, partner_user):
        match = machine.record_client_decision(client.pk, partner.pk, True, client_user).match
        machine.record_partner_decision(match.pk, True, partner_user)
        return match

    def test_accepted_to_converted(self, machine, sample_client, sample_partner, client_user, partner_user):
        match = self._mutual(machine, sample_client, sample_partner, client_user, partner_user)

        result = machine.convert_match(match.pk, partner_user)

        assert result.match.status == Match.Status.CONVERTED
        assert result.matched is False

    def test_only_mutual_matches_convert(self, machine, open_match, partner_user):
        with pytest.raises(ValidationError):
            machine.convert_match(open_match.pk, partner_user)

    def test_decisions_are_final_after_conversion(self, machine, sample_client, sample_partner,
                                                  client_user, partner_user):
        match = self._mutual(machine, sample_client, sample_partner, client_user, partner_user)
        machine.convert_match(match.pk, client_user)

        with pytest.raises(ValidationError):
            machine.record_partner_decision(match.pk, False, partner_user)
        repeat = machine.record_partner_decision(match.pk, True, partner_user)
        assert repeat.match.status == Match.Status.CONVERTED


class FlakyRepository(DjangoMatchRepository):
    """Loses the first ``failures`` compare-and-set races to a phantom writer."""

    def __init__(self, failures: int):
        self.failures = failures
        self.attempts = 0

    def compare_and_set(self, match, fields):
        self.attempts += 1
        if self.failures:
            self.failures -= 1
            Match.objects.filter(pk=match.pk).update(version=F("version") + 1)
            return False
        return super().compare_and_set(match, fields)


@pytest.mark.django_db
class TestConcurrency:
    def test_stale_version_is_rejected(self, open_match, partner_user):
        stale = Match.objects.get(pk=open_match.pk)
        MatchStateMachine().record_partner_decision(open_match.pk, True, partner_user)

        written = DjangoMatchRepository().compare_and_set(stale, {"partner_decision": Decision.DECLINED})

        assert written is False
        assert Match.objects.get(pk=open_match.pk).partner_decision == Decision.ACCEPTED

    def test_retries_after_lost_race(self, open_match, partner_user):
        repository = FlakyRepository(failures=2)
        result = MatchStateMachine(repository).record_partner_decision(open_match.pk, True, partner_user)

        assert repository.attempts == 3
        assert result.match.partner_decision == Decision.ACCEPTED
        assert Match.objects.get(pk=open_match.pk).version == 3

    def test_gives_up_after_max_attempts(self, open_match, partner_user):
        repository = FlakyRepository(failures=10)
        with pytest.raises(ConcurrencyConflict):
            MatchStateMachine(repository, max_attempts=3).record_partner_decision(
                open_match.pk, True, partner_user
            )
        assert repository.attempts == 3
        assert Match.objects.get(pk=open_match.pk).partner_decision == Decision.UNDECIDED
