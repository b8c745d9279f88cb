# companies/api/urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from companies.api.views import CompanyViewSet

router = SimpleRouter()
router.register("", CompanyViewSet, basename="company")

urlpatterns = [
    path("", include(router.urls)),
]
