from django.urls import path, include
from rest_framework.routers import DefaultRouter

from apps.indicators.api.v1.views import (
    IndicatorViewSet,
    InstitutionViewSet,
)

router = DefaultRouter()
router.register(r'indicators', IndicatorViewSet, basename='indicator')
router.register(r'institutions', InstitutionViewSet, basename='institution')

urlpatterns = [
    path('', include(router.urls)),
]
