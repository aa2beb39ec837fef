import pytest
import requests
from unittest.mock import Mock


def make_response(payload=None, status_code=200):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload if payload is not None else {}
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status_code} Error", response=response
        )
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def mock_requests_get(mocker):
    return mocker.patch("requests.get")


@pytest.fixture
def sbif_settings(settings):
    settings.SBIF_API_KEY = "test-key"
    settings.SBIF_API_URL = "http://api.sbif.cl/api-sbifv3/recursos_api/"
    settings.SBIF_VALIDATE_INDICATOR_DATES = False
    return settings


@pytest.fixture
def sbif_response():
    """Factory for fake requests responses."""
    return make_response
