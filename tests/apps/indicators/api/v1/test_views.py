import pytest
import requests
from datetime import date, timedelta

from rest_framework.test import APIClient
from rest_framework import status


@pytest.fixture
def api_client():
    """DRF API client."""
    return APIClient()


@pytest.fixture(autouse=True)
def configured(sbif_settings):
    return sbif_settings


class TestIndicatorViewSet:
    """Tests for IndicatorViewSet endpoints."""

    def test_list_indicators(self, api_client, mock_requests_get):
        """
        Test GET /api/v1/indicators/ lists the supported indicators without calling SBIF.
        """
        response = api_client.get("/api/v1/indicators/")

        assert response.status_code == status.HTTP_200_OK
        names = [item["name"] for item in response.data]
        assert names == ["uf", "utm", "dolar", "euro", "ipc"]
        mock_requests_get.assert_not_called()

    def test_retrieve_indicator(self, api_client, mock_requests_get, sbif_response):
        """
        Test GET /api/v1/indicators/dolar/?date=2024-05-21 returns the dollar value.
        """
        mock_requests_get.return_value = sbif_response({"Dolares": [{"Valor": "650,32", "Fecha": "2024-05-21"}]})

        response = api_client.get("/api/v1/indicators/dolar/", {"date": "2024-05-21"})

        assert response.status_code == status.HTTP_200_OK
        assert response.data["indicator"] == "dolar"
        assert response.data["date"] == "2024-05-21"
        assert response.data["value"] == 650.32
        assert "/dolar/2024/05/dias/21?apikey=test-key" in mock_requests_get.call_args[0][0]

    def test_retrieve_indicator_alias(self, api_client, mock_requests_get, sbif_response):
        mock_requests_get.return_value = sbif_response({"Euros": [{"Valor": "1.020,15"}]})

        response = api_client.get("/api/v1/indicators/EUR/", {"date": "2024-05-21"})

        assert response.status_code == status.HTTP_200_OK
        assert response.data["indicator"] == "euro"
        assert response.data["value"] == 1020.15

    def test_retrieve_unknown_indicator(self, api_client, mock_requests_get):
        response = api_client.get("/api/v1/indicators/bitcoin/")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        mock_requests_get.assert_not_called()

    def test_retrieve_invalid_date_format(self, api_client, mock_requests_get):
        response = api_client.get("/api/v1/indicators/uf/", {"date": "21-05-2024"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        mock_requests_get.assert_not_called()

    def test_retrieve_without_api_key(self, api_client, mock_requests_get, settings):
        settings.SBIF_API_KEY = None

        response = api_client.get("/api/v1/indicators/uf/")

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.data["kind"] == "api_key_not_found"
        mock_requests_get.assert_not_called()

    def test_retrieve_endpoint_not_found(self, api_client, mock_requests_get, sbif_response):
        mock_requests_get.return_value = sbif_response(status_code=404)

        response = api_client.get("/api/v1/indicators/utm/", {"date": "2024-05-21"})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["kind"] == "endpoint_not_found"
        assert "/utm/2024/05" in response.data["error"]
        assert "test-key" not in response.data["error"]

    def test_retrieve_connection_failure(self, api_client, mock_requests_get):
        mock_requests_get.side_effect = requests.exceptions.ConnectionError("refused")

        response = api_client.get("/api/v1/indicators/ipc/", {"date": "2024-05-21"})

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data["kind"] == "connection_failure"

    def test_retrieve_malformed_response(self, api_client, mock_requests_get, sbif_response):
        mock_requests_get.return_value = sbif_response({"UFs": {"Valor": "1,0"}})

        response = api_client.get("/api/v1/indicators/uf/", {"date": "2024-05-21"})

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data["kind"] == "request_failure"

    def test_convert(self, api_client, mock_requests_get, sbif_response):
        """
        Test GET /api/v1/indicators/convert/ converts UF to pesos.
        """
        mock_requests_get.return_value = sbif_response({"UFs": [{"Valor": "37.245,12"}]})

        response = api_client.get(
            "/api/v1/indicators/convert/",
            {"indicator": "uf", "amount": "10", "date": "2024-05-07"}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["indicator"] == "uf"
        assert response.data["converted_amount"] == "372451.20"
        assert response.data["date"] == "2024-05-07"

    def test_convert_missing_params(self, api_client, mock_requests_get):
        response = api_client.get("/api/v1/indicators/convert/", {"indicator": "uf"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        mock_requests_get.assert_not_called()

    @pytest.mark.parametrize("params", [
        {"indicator": "ipc", "amount": "10"},
        {"indicator": "uf", "amount": "-1"},
        {"indicator": "uf", "amount": "abc"},
        {"indicator": "bitcoin", "amount": "10"},
    ])
    def test_convert_invalid_params(self, api_client, mock_requests_get, params):
        response = api_client.get("/api/v1/indicators/convert/", params)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        mock_requests_get.assert_not_called()


class TestInstitutionViewSet:
    """Tests for InstitutionViewSet endpoints."""

    def test_retrieve_institution(self, api_client, mock_requests_get, sbif_response):
        profile = {"CodigoInstitucion": "001", "NombreInstitucion": "BANCO DE CHILE"}
        mock_requests_get.return_value = sbif_response({"Perfiles": [profile]})

        response = api_client.get("/api/v1/institutions/001/", {"date": "2024-05-07"})

        assert response.status_code == status.HTTP_200_OK
        assert response.data["institution_code"] == "001"
        assert response.data["profile"] == profile
        assert "/perfil/instituciones/001/2024/05?" in mock_requests_get.call_args[0][0]

    def test_retrieve_institution_malformed_profile(self, api_client, mock_requests_get, sbif_response):
        mock_requests_get.return_value = sbif_response({"Perfiles": ["x"]})

        response = api_client.get("/api/v1/institutions/001/", {"date": "2024-05-07"})

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data["kind"] == "request_failure"

    def test_retrieve_institution_future_date(self, api_client, mock_requests_get):
        future = (date.today() + timedelta(days=400)).isoformat()

        response = api_client.get("/api/v1/institutions/001/", {"date": future})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["kind"] == "invalid_date"
        mock_requests_get.assert_not_called()
