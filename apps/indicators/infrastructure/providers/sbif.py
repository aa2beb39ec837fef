"""
SBIF API client.
Fetches Chilean financial indicators (dollar, euro, UF, UTM, IPC) and
institution profiles from api.sbif.cl, one GET request per call.
"""

import logging
from datetime import date, datetime
from typing import Any, Optional
from zoneinfo import ZoneInfo

import requests

from apps.indicators.domain.exceptions import (
    ApiKeyNotFound,
    ConnectionFailure,
    EndpointNotFound,
    InvalidDate,
    RequestFailure,
)
from apps.indicators.domain.interfaces import BaseIndicatorProvider, DateInput
from apps.indicators.domain.models import (
    IndicatorCode,
    IndicatorValue,
    InstitutionProfile,
    NumericValue,
)

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "http://api.sbif.cl/api-sbifv3/recursos_api/"
DEFAULT_TIMEZONE = "America/Santiago"
DEFAULT_TIMEOUT = 10


def today(tz: str = DEFAULT_TIMEZONE) -> date:
    return datetime.now(ZoneInfo(tz)).date()


def normalize_date(value: DateInput = None, tz: str = DEFAULT_TIMEZONE) -> date:
    """
    Turn the caller's date into a calendar date.

    Args:
        value: None (today in the service timezone), a date, a datetime
            or an ISO-8601 string
        tz: timezone used to resolve "today"

    Raises:
        InvalidDate: if the value cannot be read as a date
    """
    if value is None:
        return today(tz)

    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(value.strip()).date()
        except ValueError:
            raise InvalidDate(value)

    raise InvalidDate(value)


def validate_date(value: date, tz: str = DEFAULT_TIMEZONE) -> date:
    """Reject dates after today."""
    if value > today(tz):
        raise InvalidDate(value.isoformat())
    return value


def _year_month(value: date) -> str:
    return f"{value.year:04d}/{value.month:02d}"


def indicator_endpoint(code: IndicatorCode, value: date) -> str:
    if not code.is_numeric:
        raise ValueError(f"{code.name} has no indicator endpoint, use institution_endpoint")

    endpoint = f"/{code.path}/{_year_month(value)}"
    if code.is_daily:
        endpoint += f"/dias/{value.day:02d}"
    return endpoint


def institution_endpoint(institution_code: str, value: date) -> str:
    return f"/{IndicatorCode.INSTITUTION_PROFILE.path}/{institution_code}/{_year_month(value)}"


def build_url(api_base: str, endpoint: str, api_key: str) -> str:
    if endpoint.startswith("/"):
        endpoint = endpoint[1:]
    return f"{api_base}{endpoint}?apikey={api_key}&formato=json"


def normalize_number(number: Any) -> float:
    """
    Convert an SBIF formatted number to float.

    The API uses "." as thousands separator and "," as decimal separator:
    "1.234,56" -> 1234.56
    """
    if isinstance(number, (int, float)):
        return float(number)

    number = str(number).replace(".", "").replace(",", ".")
    return float(number)


def extract_value(body: Any, code: IndicatorCode) -> Any:
    """
    Pick the indicator value out of a decoded response.

    Returns the raw "Valor" of the first element of the indicator's array,
    or 0 when the response carries no data. Institution profiles are
    returned wrapped, as an InstitutionProfile.

    Raises:
        ValueError: if the array or its first element has an unexpected shape
    """
    items = body.get(code.response_field) if isinstance(body, dict) else None
    if items and not isinstance(items, list):
        raise ValueError(f"{code.response_field} is not a list")

    first = items[0] if items else None
    if first and not isinstance(first, dict):
        raise ValueError(f"{code.response_field} entries are not objects")

    if code is IndicatorCode.INSTITUTION_PROFILE:
        return InstitutionProfile(dict(first or {}))

    if not first:
        return 0
    return first.get("Valor", 0)


class SbifClient(BaseIndicatorProvider):
    """
    Client for the SBIF indicators API.

    Configuration is fixed at construction. A missing API key is reported
    when a request is attempted, not here.
    """

    def __init__(
        self,
        api_key: Optional[str],
        api_base: str = DEFAULT_API_BASE,
        timeout: float = DEFAULT_TIMEOUT,
        timezone: str = DEFAULT_TIMEZONE,
        validate_indicator_dates: bool = False,
    ):
        self._api_key = api_key
        self._api_base = api_base
        self._timeout = timeout
        self._timezone = timezone
        self._validate_indicator_dates = validate_indicator_dates

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key

    @property
    def api_base(self) -> str:
        return self._api_base

    @property
    def timezone(self) -> str:
        return self._timezone

    def resolve_date(self, value: DateInput = None) -> date:
        return normalize_date(value, self._timezone)

    def get_dollar(self, date: DateInput = None) -> float:
        return self.get_indicator(IndicatorCode.DOLLAR, date)

    def get_euro(self, date: DateInput = None) -> float:
        return self.get_indicator(IndicatorCode.EURO, date)

    def get_utm(self, date: DateInput = None) -> float:
        return self.get_indicator(IndicatorCode.UTM, date)

    def get_uf(self, date: DateInput = None) -> float:
        return self.get_indicator(IndicatorCode.UF, date)

    def get_ipc(self, date: DateInput = None) -> float:
        return self.get_indicator(IndicatorCode.IPC, date)

    def get_indicator(self, code: IndicatorCode, date: DateInput = None) -> float:
        """
        Fetch the value of a numeric indicator for a given date.

        Args:
            code: indicator to query (anything but INSTITUTION_PROFILE)
            date: date to query, defaults to today

        Returns:
            Indicator value as float, 0.0 when the API has no data for the date
        """
        if not code.is_numeric:
            raise ValueError(f"{code.name} is not a numeric indicator, use get_institution_data")

        result = self.fetch(code, date)
        return result.value

    def get_institution_data(self, institution_code: str, date: DateInput = None) -> InstitutionProfile:
        """
        Fetch the profile of a financial institution for a given month.

        Raises:
            InvalidDate: if the date is in the future (checked before any request)
        """
        result = self.fetch(IndicatorCode.INSTITUTION_PROFILE, date, institution_code=institution_code)
        return result

    def fetch(
        self,
        code: IndicatorCode,
        date: DateInput = None,
        institution_code: Optional[str] = None,
    ) -> IndicatorValue:
        """
        Fetch any indicator, returning a NumericValue or an InstitutionProfile
        depending on the code.
        """
        query_date = self.resolve_date(date)

        if code is IndicatorCode.INSTITUTION_PROFILE:
            if not institution_code:
                raise ValueError("institution_code is required for institution profiles")
            validate_date(query_date, self._timezone)
            endpoint = institution_endpoint(institution_code, query_date)
            body = self.get(endpoint)

            try:
                return extract_value(body, code)
            except ValueError as e:
                logger.warning("Unreadable institution profile from SBIF (%s): %s", endpoint, e)
                raise RequestFailure(endpoint, e) from e

        if self._validate_indicator_dates:
            validate_date(query_date, self._timezone)

        endpoint = indicator_endpoint(code, query_date)
        body = self.get(endpoint)

        try:
            value = normalize_number(extract_value(body, code))
        except (ValueError, TypeError) as e:
            logger.warning("Unreadable %s value from SBIF (%s): %s", code.name, endpoint, e)
            raise RequestFailure(endpoint, e) from e

        return NumericValue(code=code, value=value)

    def get(self, endpoint: str) -> Any:
        """
        Request an endpoint and return the decoded JSON body.

        Raises:
            ApiKeyNotFound: no API key configured, nothing is sent
            EndpointNotFound: the API answered 404
            ConnectionFailure: the API could not be reached
            RequestFailure: any other transport or HTTP error
        """
        if not self._api_key:
            raise ApiKeyNotFound()

        url = build_url(self._api_base, endpoint, self._api_key)
        logger.debug("GET SBIF %s", endpoint)

        try:
            response = requests.get(url, timeout=self._timeout)

            if response.status_code == 404:
                logger.warning("SBIF endpoint not found: %s", endpoint)
                raise EndpointNotFound(endpoint, url)

            response.raise_for_status()
            return response.json()

        except requests.exceptions.ConnectionError as e:
            logger.warning("Could not connect to SBIF API for %s", endpoint)
            raise ConnectionFailure(endpoint, url) from e
        except requests.exceptions.RequestException as e:
            logger.warning("Request to SBIF failed for %s: %s", endpoint, e.__class__.__name__)
            raise RequestFailure(endpoint, e, url) from e
        except ValueError as e:
            logger.warning("Invalid JSON from SBIF for %s", endpoint)
            raise RequestFailure(endpoint, e, url) from e
