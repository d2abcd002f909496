"""DRF viewsets for the marketplace API."""
from django.db import transaction
from django.db.models import Q
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import filters, mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from apps.clients.models import Brief, Client
from apps.core.exceptions import AuthorizationError, ValidationError
from apps.matching.analytics import partner_metrics
from apps.matching.engine import generate_matches
from apps.matching.models import Match
from apps.matching.repository import DjangoMatchRepository
from apps.matching.state import MatchStateMachine
from apps.matching.swipe import ClientSwipeCoordinator, PartnerSwipeCoordinator
from apps.matching.tasks import rescore_partner_matches
from apps.messaging import services as messaging
from apps.partners.models import Partner
from apps.projects.services import create_project

from .serializers import (
    BriefSerializer,
    ClientSerializer,
    ClientSwipeSerializer,
    MatchDetailSerializer,
    MatchUpdateSerializer,
    MessageSerializer,
    PartnerSerializer,
    PartnerSwipeSerializer,
    PendingRequestSerializer,
    ProjectCreateSerializer,
    ProjectSerializer,
)


def client_profile(user) -> Client:
    client = Client.objects.filter(user=user).first()
    if client is None:
        raise AuthorizationError("A client profile is required")
    return client


def partner_profile(user) -> Partner:
    partner = Partner.objects.filter(user=user).first()
    if partner is None:
        raise AuthorizationError("A partner profile is required")
    return partner


class ClientViewSet(viewsets.ModelViewSet):
    """The caller's own client profile."""

    queryset = Client.objects.all()
    serializer_class = ClientSerializer
    http_method_names = ["get", "post", "patch", "put", "head", "options"]

    def get_queryset(self):
        return Client.objects.filter(user=self.request.user)

    def perform_create(self, serializer):
        if Client.objects.filter(user=self.request.user).exists():
            raise ValidationError("Client profile already exists", detail={"user": "Already has a client profile."})
        serializer.save(user=self.request.user)


class PartnerViewSet(viewsets.ModelViewSet):
    queryset = Partner.objects.all()
    serializer_class = PartnerSerializer
    http_method_names = ["get", "post", "patch", "put", "head", "options"]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ["company", "name", "industry"]
    filterset_fields = ["industry", "capacity", "verified"]
    ordering_fields = ["rating", "hourly_rate_min", "created_at"]
    ordering = ["created_at"]

    def perform_create(self, serializer):
        if Partner.objects.filter(user=self.request.user).exists():
            raise ValidationError("Partner profile already exists", detail={"user": "Already has a partner profile."})
        serializer.save(user=self.request.user)

    def perform_update(self, serializer):
        if serializer.instance.user_id != self.request.user.pk:
            raise AuthorizationError("Only the partner can edit its profile")
        partner = serializer.save()
        rescore_partner_matches.delay(str(partner.pk))

    @action(detail=True, methods=["get"])
    def metrics(self, request, pk=None):
        """GET /api/partners/{id}/metrics/"""
        partner = self.get_object()
        if partner.user_id != request.user.pk:
            raise AuthorizationError("Only the partner can see its metrics")
        return Response(partner_metrics(partner.pk))


class BriefViewSet(mixins.CreateModelMixin, mixins.ListModelMixin,
                   mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    queryset = Brief.objects.all()
    serializer_class = BriefSerializer

    def get_queryset(self):
        return Brief.objects.filter(client__user=self.request.user)

    def create(self, request, *args, **kwargs):
        """POST /api/briefs/ -> {"brief": {...}, "matches": [...]}"""
        client = client_profile(request.user)
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        with transaction.atomic():
            brief = serializer.save(client=client)
            matches = generate_matches(brief)
        return Response(
            {
                "brief": BriefSerializer(brief).data,
                "matches": MatchDetailSerializer(matches, many=True).data,
            },
            status=status.HTTP_201_CREATED,
        )


class MatchViewSet(mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    queryset = Match.objects.all()
    serializer_class = MatchDetailSerializer

    def get_queryset(self):
        user = self.request.user
        return (
            Match.objects.filter(Q(client__user=user) | Q(partner__user=user))
            .select_related("client", "partner", "brief")
        )

    def partial_update(self, request, pk=None):
        """PATCH /api/matches/{id}/ with pipeline fields and/or decisions."""
        unknown = sorted(set(request.data) - set(MatchUpdateSerializer().fields))
        if unknown:
            raise ValidationError(
                "Fields cannot be updated",
                detail={name: "This field cannot be updated." for name in unknown},
            )
        serializer = MatchUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        transition = MatchStateMachine().update_match(pk, serializer.validated_data, request.user)
        return Response(MatchDetailSerializer(transition.match).data)

    @action(detail=False, methods=["post"], url_path="client-swipe")
    def client_swipe(self, request):
        """POST /api/matches/client-swipe/ {"partner_id": "uuid", "liked": true}"""
        serializer = ClientSwipeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        client = client_profile(request.user)
        result = ClientSwipeCoordinator().swipe(
            client.pk,
            serializer.validated_data["partner_id"],
            serializer.validated_data["liked"],
            request.user,
        )
        return Response({"matched": result.matched, "match": MatchDetailSerializer(result.match).data})

    @action(detail=False, methods=["post"], url_path="partner-swipe")
    def partner_swipe(self, request):
        """POST /api/matches/partner-swipe/ {"match_id": "uuid", "accepted": true}"""
        serializer = PartnerSwipeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = PartnerSwipeCoordinator().swipe(
            serializer.validated_data["match_id"],
            serializer.validated_data["accepted"],
            request.user,
        )
        return Response({
            "matched": result.matched,
            "match": MatchDetailSerializer(result.match).data,
            "client_id": str(result.client_id),
        })

    @action(detail=False, methods=["get"], url_path=r"client/(?P<client_id>[^/.]+)")
    def by_client(self, request, client_id=None):
        repository = DjangoMatchRepository()
        client = repository.get_client(client_id)
        if client.user_id != request.user.pk:
            raise AuthorizationError("Not your client profile")
        matches = repository.matches_for_client(client.pk)
        return Response(MatchDetailSerializer(matches, many=True).data)

    @action(detail=False, methods=["get"], url_path=r"partner/(?P<partner_id>[^/.]+)")
    def by_partner(self, request, partner_id=None):
        repository = DjangoMatchRepository()
        partner = repository.get_partner(partner_id)
        if partner.user_id != request.user.pk:
            raise AuthorizationError("Not your partner profile")
        matches = repository.matches_for_partner(partner.pk)
        return Response(MatchDetailSerializer(matches, many=True).data)

    @action(detail=False, methods=["get"])
    def unswiped(self, request):
        """Partners the caller's client has not swiped on yet."""
        client = client_profile(request.user)
        partners = ClientSwipeCoordinator().unswiped_partners(client.pk)
        return Response(PartnerSerializer(partners, many=True).data)

    @action(detail=False, methods=["get"])
    def pending(self, request):
        """Clients waiting on the caller's partner answer."""
        partner = partner_profile(request.user)
        requests = PartnerSwipeCoordinator().pending_requests(partner.pk)
        return Response(PendingRequestSerializer(requests, many=True).data)

    @action(detail=True, methods=["post"])
    def convert(self, request, pk=None):
        """POST /api/matches/{id}/convert/: open the project, match becomes converted."""
        serializer = ProjectCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        project = create_project(pk, request.user, **serializer.validated_data)
        return Response(ProjectSerializer(project).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["get", "post"])
    def messages(self, request, pk=None):
        if request.method == "POST":
            message = messaging.send_message(pk, request.user, request.data.get("body", ""))
            return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)
        return Response(MessageSerializer(messaging.list_messages(pk, request.user), many=True).data)

    @action(detail=True, methods=["post"], url_path="messages/read")
    def read_messages(self, request, pk=None):
        updated = messaging.mark_read(pk, request.user)
        return Response({"updated": updated})
