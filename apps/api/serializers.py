"""DRF serializers."""
from rest_framework import serializers

from apps.clients.models import Brief, Client
from apps.matching.models import Match
from apps.messaging.models import Message
from apps.partners.models import Partner
from apps.projects.models import Project


class StringListField(serializers.ListField):
    child = serializers.CharField(max_length=100, trim_whitespace=True)


class ClientSerializer(serializers.ModelSerializer):
    odoo_modules = StringListField(required=False)

    class Meta:
        model = Client
        fields = [
            "id", "name", "email", "company", "industry", "company_size",
            "budget", "project_timeline", "odoo_modules", "created_at",
        ]
        read_only_fields = ["id", "created_at"]


class PartnerSerializer(serializers.ModelSerializer):
    services = StringListField(required=False)
    certifications = StringListField(required=False)

    class Meta:
        model = Partner
        fields = [
            "id", "name", "email", "company", "industry", "services",
            "hourly_rate_min", "hourly_rate_max", "capacity", "rating",
            "review_count", "verified", "certifications", "description",
            "website", "created_at",
        ]
        read_only_fields = ["id", "review_count", "verified", "created_at"]

    def validate(self, attrs):
        rate_min = attrs.get("hourly_rate_min", getattr(self.instance, "hourly_rate_min", 75))
        rate_max = attrs.get("hourly_rate_max", getattr(self.instance, "hourly_rate_max", 250))
        if rate_min > rate_max:
            raise serializers.ValidationError(
                {"hourly_rate_max": "Must be greater than or equal to hourly_rate_min."}
            )
        return attrs


class BriefSerializer(serializers.ModelSerializer):
    modules = StringListField(required=False)
    timeline_weeks = serializers.IntegerField(min_value=1, max_value=520, required=False, allow_null=True)

    class Meta:
        model = Brief
        fields = [
            "id", "client", "title", "description", "modules", "pain_points",
            "integrations", "budget", "timeline_weeks", "priority", "status",
            "created_at",
        ]
        read_only_fields = ["id", "client", "status", "created_at"]


class MatchSerializer(serializers.ModelSerializer):
    client_liked = serializers.BooleanField(read_only=True, allow_null=True)
    partner_responded = serializers.BooleanField(read_only=True)
    partner_accepted = serializers.BooleanField(read_only=True, allow_null=True)

    class Meta:
        model = Match
        fields = [
            "id", "client", "partner", "brief", "score", "score_breakdown",
            "reasons", "client_liked", "partner_responded", "partner_accepted",
            "status", "expected_revenue", "expected_closing_date",
            "partner_notes", "responded_at", "created_at",
        ]
        read_only_fields = fields


class MatchDetailSerializer(MatchSerializer):
    """Match joined with the client, partner and brief it links."""

    client_detail = ClientSerializer(source="client", read_only=True)
    partner_detail = PartnerSerializer(source="partner", read_only=True)
    brief_detail = BriefSerializer(source="brief", read_only=True, allow_null=True)

    class Meta(MatchSerializer.Meta):
        fields = MatchSerializer.Meta.fields + ["client_detail", "partner_detail", "brief_detail"]
        read_only_fields = fields


class MatchUpdateSerializer(serializers.Serializer):
    expected_revenue = serializers.DecimalField(
        max_digits=12, decimal_places=2, required=False, allow_null=True
    )
    expected_closing_date = serializers.DateField(required=False, allow_null=True)
    partner_notes = serializers.CharField(required=False, allow_blank=True)
    client_liked = serializers.BooleanField(required=False)
    partner_accepted = serializers.BooleanField(required=False)


class ClientSwipeSerializer(serializers.Serializer):
    partner_id = serializers.UUIDField()
    liked = serializers.BooleanField()


class PartnerSwipeSerializer(serializers.Serializer):
    match_id = serializers.UUIDField()
    accepted = serializers.BooleanField()


class PendingRequestSerializer(serializers.Serializer):
    client = ClientSerializer(read_only=True)
    match = MatchSerializer(read_only=True)
    brief = BriefSerializer(read_only=True, allow_null=True)


class ProjectSerializer(serializers.ModelSerializer):
    class Meta:
        model = Project
        fields = [
            "id", "match", "client", "partner", "title", "status",
            "contract_value", "start_date", "end_date", "client_satisfaction",
            "created_at",
        ]
        read_only_fields = ["id", "match", "client", "partner", "status", "created_at"]


class MessageSerializer(serializers.ModelSerializer):
    class Meta:
        model = Message
        fields = ["id", "match", "sender", "recipient", "body", "read", "created_at"]
        read_only_fields = ["id", "match", "sender", "recipient", "read", "created_at"]


class ProjectCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=300, required=False, allow_blank=True)
    contract_value = serializers.DecimalField(
        max_digits=12, decimal_places=2, required=False, allow_null=True
    )
    start_date = serializers.DateField(required=False, allow_null=True)
    end_date = serializers.DateField(required=False, allow_null=True)
