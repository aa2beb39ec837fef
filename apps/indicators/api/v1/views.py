"""
ViewSets for the indicators API v1.
Every request is answered live from the SBIF API; nothing is stored.
"""

import logging

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from apps.indicators.api.v1.serializers import (
    ConversionQuerySerializer,
    ConversionResultSerializer,
    DateQuerySerializer,
    IndicatorSerializer,
    IndicatorValueSerializer,
    InstitutionProfileSerializer,
)
from apps.indicators.domain.exceptions import ErrorKind, SbifError
from apps.indicators.domain.models import IndicatorCode
from apps.indicators.domain.services import IndicatorService
from apps.indicators.infrastructure.providers.registry import get_indicator_client

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorKind.API_KEY_NOT_FOUND: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.ENDPOINT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONNECTION_FAILURE: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.REQUEST_FAILURE: status.HTTP_502_BAD_GATEWAY,
    ErrorKind.INVALID_DATE: status.HTTP_400_BAD_REQUEST,
}

DATE_PARAMETER = OpenApiParameter(
    "date", OpenApiTypes.DATE, description="Date to query (YYYY-MM-DD, optional, defaults to today)"
)


def get_indicator_service() -> IndicatorService:
    return IndicatorService(get_indicator_client())


def error_response(error: SbifError) -> Response:
    """Map a provider error to an API response."""
    logger.warning("SBIF error %s: %s", error.kind.value, error)
    return Response(
        {"error": str(error), "kind": error.kind.value},
        status=ERROR_STATUS[error.kind]
    )


@extend_schema(tags=['Indicators'])
class IndicatorViewSet(viewsets.ViewSet):

    lookup_field = 'name'

    @extend_schema(responses=IndicatorSerializer(many=True), description="List supported indicators")
    def list(self, request):
        serializer = IndicatorSerializer(IndicatorCode.numeric(), many=True)
        return Response(serializer.data)

    @extend_schema(
        parameters=[DATE_PARAMETER],
        responses=IndicatorValueSerializer,
        description="Get the value of an indicator (uf, utm, dolar, euro, ipc) for a date"
    )
    def retrieve(self, request, name=None):
        try:
            code = IndicatorCode.from_name(name)
        except ValueError as e:
            return Response({"error": str(e)}, status=status.HTTP_404_NOT_FOUND)

        query = DateQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response({"error": query.errors}, status=status.HTTP_400_BAD_REQUEST)

        try:
            result = get_indicator_service().get_indicator_value(code, query.validated_data.get('date'))
        except SbifError as e:
            return error_response(e)

        return Response(IndicatorValueSerializer(result).data)

    @extend_schema(
        parameters=[
            OpenApiParameter("indicator", OpenApiTypes.STR, required=True, description="Indicator to convert from (uf, utm, dolar, euro)"),
            OpenApiParameter("amount", OpenApiTypes.DECIMAL, required=True, description="Amount to convert"),
            DATE_PARAMETER,
        ],
        responses=ConversionResultSerializer,
        description="Convert an amount expressed in an indicator unit to Chilean pesos"
    )
    @action(detail=False, methods=['get'], url_path='convert')
    def convert(self, request):
        query = ConversionQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response({"error": query.errors}, status=status.HTTP_400_BAD_REQUEST)

        data = query.validated_data
        try:
            result = get_indicator_service().convert_to_pesos(
                data['indicator'],
                data['amount'],
                data.get('date')
            )
        except SbifError as e:
            return error_response(e)

        return Response(ConversionResultSerializer(result).data)


@extend_schema(tags=['Institutions'])
class InstitutionViewSet(viewsets.ViewSet):

    lookup_field = 'code'

    @extend_schema(
        parameters=[DATE_PARAMETER],
        responses=InstitutionProfileSerializer,
        description="Get the profile of a financial institution for the month of a date"
    )
    def retrieve(self, request, code=None):
        query = DateQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response({"error": query.errors}, status=status.HTTP_400_BAD_REQUEST)

        try:
            result = get_indicator_service().get_institution_profile(code, query.validated_data.get('date'))
        except SbifError as e:
            return error_response(e)

        return Response(InstitutionProfileSerializer(result).data)
