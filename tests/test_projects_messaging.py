"""Tests for projects, messaging, partner metrics and the rescoring task."""
from decimal import Decimal

import pytest

from apps.core.exceptions import AuthorizationError, ValidationError
from apps.matching.analytics import partner_metrics
from apps.matching.models import Match
from apps.matching.state import MatchStateMachine
from apps.matching.tasks import rescore_partner_matches
from apps.messaging import services as messaging
from apps.projects.models import Project
from apps.projects.services import create_project


@pytest.fixture
def mutual_match(sample_brief, sample_partner, client_user, partner_user):
    machine = MatchStateMachine()
    match = machine.record_client_decision(sample_brief.client.pk, sample_partner.pk, True, client_user).match
    machine.record_partner_decision(match.pk, True, partner_user)
    return Match.objects.get(pk=match.pk)


@pytest.fixture
def suggested_match(sample_client, sample_partner, client_user):
    return MatchStateMachine().record_client_decision(
        sample_client.pk, sample_partner.pk, True, client_user
    ).match


@pytest.mark.django_db
class TestCreateProject:
    def test_converts_match(self, mutual_match, partner_user):
        MatchStateMachine().update_match(mutual_match.pk, {"expected_revenue": "60000"}, partner_user)

        project = create_project(mutual_match.pk, partner_user)

        assert project.title == "CRM and accounting rollout"
        assert project.contract_value == Decimal("60000.00")
        assert project.client == mutual_match.client
        assert project.status == Project.Status.MATCHED
        assert Match.objects.get(pk=mutual_match.pk).status == Match.Status.CONVERTED

    def test_repeat_returns_same_project(self, mutual_match, client_user):
        first = create_project(mutual_match.pk, client_user, title="Phase 1")
        second = create_project(mutual_match.pk, client_user, title="Phase 2")

        assert first.pk == second.pk
        assert Project.objects.count() == 1

    def test_requires_mutual_match(self, suggested_match, client_user):
        with pytest.raises(ValidationError):
            create_project(suggested_match.pk, client_user)
        assert Project.objects.count() == 0

    def test_outsider_cannot_convert(self, mutual_match, outsider):
        with pytest.raises(AuthorizationError):
            create_project(mutual_match.pk, outsider)
        assert Match.objects.get(pk=mutual_match.pk).status == Match.Status.ACCEPTED


@pytest.mark.django_db
class TestMessaging:
    def test_conversation(self, mutual_match, client_user, partner_user):
        messaging.send_message(mutual_match.pk, client_user, "  Hi, when can we start?  ")
        messaging.send_message(mutual_match.pk, partner_user, "Next Monday works.")

        thread = messaging.list_messages(mutual_match.pk, partner_user)

        assert [m.body for m in thread] == ["Hi, when can we start?", "Next Monday works."]
        assert thread[0].recipient == partner_user

    def test_mark_read_only_touches_own_inbox(self, mutual_match, client_user, partner_user):
        messaging.send_message(mutual_match.pk, client_user, "one")
        messaging.send_message(mutual_match.pk, client_user, "two")
        messaging.send_message(mutual_match.pk, partner_user, "three")

        assert messaging.mark_read(mutual_match.pk, partner_user) == 2
        assert messaging.mark_read(mutual_match.pk, partner_user) == 0

    def test_locked_until_mutual(self, suggested_match, client_user):
        with pytest.raises(ValidationError):
            messaging.send_message(suggested_match.pk, client_user, "hello?")

    def test_outsider_blocked(self, mutual_match, outsider):
        with pytest.raises(AuthorizationError):
            messaging.list_messages(mutual_match.pk, outsider)

    def test_blank_body(self, mutual_match, client_user):
        with pytest.raises(ValidationError):
            messaging.send_message(mutual_match.pk, client_user, "   ")

    def test_outsider_with_blank_body_is_forbidden(self, mutual_match, outsider):
        with pytest.raises(AuthorizationError):
            messaging.send_message(mutual_match.pk, outsider, "")

    def test_still_open_after_conversion(self, mutual_match, client_user):
        create_project(mutual_match.pk, client_user)
        message = messaging.send_message(mutual_match.pk, client_user, "Kickoff notes attached")
        assert message.pk is not None


@pytest.mark.django_db
class TestPartnerMetrics:
    def test_empty(self, sample_partner):
        assert partner_metrics(sample_partner.pk) == {
            "matches_received": 0,
            "matches_accepted": 0,
            "conversions": 0,
            "total_project_value": 0,
        }

    def test_counts(self, mutual_match, sample_partner, partner_user):
        create_project(mutual_match.pk, partner_user, contract_value=Decimal("30000"))

        metrics = partner_metrics(sample_partner.pk)

        assert metrics["matches_received"] == 1
        assert metrics["matches_accepted"] == 0
        assert metrics["conversions"] == 1
        assert metrics["total_project_value"] == Decimal("30000")


@pytest.mark.django_db
class TestRescoreTask:
    def test_refreshes_unanswered_matches(self, suggested_match, sample_brief, sample_partner):
        Match.objects.filter(pk=suggested_match.pk).update(brief=sample_brief, score=3)
        sample_partner.services = ["CRM", "Accounting"]
        sample_partner.save()

        result = rescore_partner_matches(str(sample_partner.pk))

        assert result == {"updated": 1, "skipped": 0}
        match = Match.objects.get(pk=suggested_match.pk)
        assert match.score_breakdown["moduleFit"] == 100
        assert match.score > 81

    def test_answered_matches_untouched(self, mutual_match, sample_partner):
        Match.objects.filter(pk=mutual_match.pk).update(score=3)

        result = rescore_partner_matches(str(sample_partner.pk))

        assert result == {"updated": 0, "skipped": 0}
        assert Match.objects.get(pk=mutual_match.pk).score == 3

    def test_missing_partner(self, db):
        assert rescore_partner_matches("00000000-0000-0000-0000-000000000000") is None
