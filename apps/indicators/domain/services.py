"""
Domain services - Core business logic on top of an indicator provider.
"""

import logging
from decimal import Decimal

from apps.indicators.application.dto import (
    ConversionResultDTO,
    IndicatorValueDTO,
    InstitutionProfileDTO,
)
from apps.indicators.domain.interfaces import BaseIndicatorProvider, DateInput
from apps.indicators.domain.models import IndicatorCode

logger = logging.getLogger(__name__)


class IndicatorService:
    """
    Application-facing service over a BaseIndicatorProvider.

    Provider errors (ApiKeyNotFound, EndpointNotFound, ...) are not caught
    here; they reach the caller unchanged.
    """

    def __init__(self, provider: BaseIndicatorProvider):
        self.provider = provider

    def get_indicator_value(
        self,
        code: IndicatorCode,
        query_date: DateInput = None
    ) -> IndicatorValueDTO:
        resolved = self.provider.resolve_date(query_date)
        value = self.provider.get_indicator(code, resolved)

        return IndicatorValueDTO(
            indicator=code.path,
            query_date=resolved,
            value=value,
        )

    def get_institution_profile(
        self,
        institution_code: str,
        query_date: DateInput = None
    ) -> InstitutionProfileDTO:
        resolved = self.provider.resolve_date(query_date)
        profile = self.provider.get_institution_data(institution_code, resolved)

        return InstitutionProfileDTO(
            institution_code=institution_code,
            query_date=resolved,
            profile=dict(profile.data),
        )

    def convert_to_pesos(
        self,
        code: IndicatorCode,
        amount: Decimal,
        query_date: DateInput = None
    ) -> ConversionResultDTO:
        """
        Convert an amount expressed in an indicator unit to Chilean pesos.

        Args:
            code: UF, UTM, DOLLAR or EURO
            amount: Amount to convert, must be positive
            query_date: Date for the indicator value (defaults to today)

        Returns:
            ConversionResultDTO with the rate used and the converted amount

        Example:
            >>> service.convert_to_pesos(IndicatorCode.UF, Decimal("10"))
            ConversionResultDTO(indicator='uf', amount=Decimal('10'),
                                rate=Decimal('37000.5'), converted_amount=Decimal('370005.00'), ...)
        """
        if not code.is_numeric or code is IndicatorCode.IPC:
            raise ValueError(f"{code.name} cannot be converted to pesos")

        if amount <= 0:
            raise ValueError(f"amount must be positive, got {amount}")

        indicator = self.get_indicator_value(code, query_date)
        rate = Decimal(str(indicator.value))
        converted_amount = (amount * rate).quantize(Decimal("0.01"))

        logger.debug("Converted %s %s to %s CLP on %s", amount, code.name, converted_amount, indicator.query_date)

        return ConversionResultDTO(
            indicator=indicator.indicator,
            amount=amount,
            rate=rate,
            converted_amount=converted_amount,
            query_date=indicator.query_date,
        )
