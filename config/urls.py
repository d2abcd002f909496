"""Root URL configuration."""
from django.contrib import admin
from django.http import JsonResponse
from django.urls import include, path


def health_check(request):
    return JsonResponse({"status": "ok"})


urlpatterns = [
    path("health/", health_check, name="health_check"),
    path("admin/", admin.site.urls),
    path("api-auth/", include("rest_framework.urls")),
    path("api/", include("apps.api.urls", namespace="api")),
]

admin.site.site_header = "PartnerMatch Admin"
admin.site.site_title = "PartnerMatch"
admin.site.index_title = "Administration"
