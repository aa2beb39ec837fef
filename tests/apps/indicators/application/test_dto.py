from decimal import Decimal
from datetime import date

from apps.indicators.application.dto import (
    ConversionResultDTO,
    IndicatorValueDTO,
    InstitutionProfileDTO,
)


class TestDataTransferObjects:
    """Tests for DTOs - mainly structure validation."""

    def test_indicator_value_dto(self):
        dto = IndicatorValueDTO(indicator="uf", query_date=date(2024, 5, 7), value=37245.12)

        assert dto.indicator == "uf"
        assert dto.value == 37245.12

    def test_institution_profile_dto_default_profile(self):
        dto = InstitutionProfileDTO(institution_code="001", query_date=date(2024, 5, 1))

        assert dto.profile == {}

    def test_conversion_result_dto(self):
        dto = ConversionResultDTO(
            indicator="dolar",
            amount=Decimal("100"),
            rate=Decimal("950.5"),
            converted_amount=Decimal("95050.00"),
            query_date=date(2024, 5, 21)
        )

        assert dto.converted_amount == Decimal("95050.00")
        assert dto.query_date == date(2024, 5, 21)
