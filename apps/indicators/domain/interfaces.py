from abc import ABC, abstractmethod
from datetime import date
from typing import Union

from apps.indicators.domain.models import IndicatorCode, InstitutionProfile

DateInput = Union[date, str, None]


class BaseIndicatorProvider(ABC):
    @abstractmethod
    def get_indicator(self, code: IndicatorCode, date: DateInput = None) -> float:
        pass

    @abstractmethod
    def get_institution_data(self, institution_code: str, date: DateInput = None) -> InstitutionProfile:
        pass

    @abstractmethod
    def resolve_date(self, value: DateInput = None) -> date:
        pass
