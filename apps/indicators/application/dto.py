"""
Data Transfer Objects for the application layer.
DTOs decouple internal domain models from external API contracts.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Dict


@dataclass
class IndicatorValueDTO:
    """Value of a numeric indicator on a date."""
    indicator: str
    query_date: date
    value: float


@dataclass
class InstitutionProfileDTO:
    """Institution profile for the month of query_date."""
    institution_code: str
    query_date: date
    profile: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ConversionResultDTO:
    """Result DTO for an indicator to pesos conversion."""
    indicator: str
    amount: Decimal
    rate: Decimal
    converted_amount: Decimal
    query_date: date
