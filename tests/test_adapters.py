"""Unit tests for station data adapters."""

import json
from unittest.mock import Mock, patch

import pytest
import requests

from station_ranker.adapters import (
    RECORDS_KEY,
    AdapterConfigurationError,
    AdapterError,
    AdapterHTTPError,
    AdapterResponseError,
    AdapterTimeoutError,
    FileAdapter,
    MineturAdapter,
    get_adapter,
)
from station_ranker.adapters.base import BaseAdapter
from station_ranker.config.models import AdvancedConfig, SourceConfig
from tests.helpers import load_fixture_payload
from tests.helpers.fixture_adapter import FIXTURES_DIR


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def base_config():
    """Create base advanced config."""
    return AdvancedConfig(http_request_timeout=30, user_agent="StationRanker/1.0")


@pytest.fixture
def minetur_config():
    return SourceConfig(base_url="https://example.test/PreciosCarburantes")


@pytest.fixture
def sample_payload():
    """Load recorded EstacionesTerrestres response."""
    return load_fixture_payload()


def make_response(status_code=200, payload=None, json_error=None, reason="OK"):
    response = Mock()
    response.status_code = status_code
    response.reason = reason
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = payload
    return response


# ============================================================================
# Base Adapter Tests
# ============================================================================


class TestBaseAdapter:
    """Tests for BaseAdapter shared behavior."""

    def test_cannot_instantiate_abstract_class(self):
        """Test that BaseAdapter cannot be instantiated directly."""
        with pytest.raises(TypeError, match="Can't instantiate abstract class"):
            BaseAdapter(timeout=30)

    @pytest.mark.parametrize("timeout", [0, 4, 301])
    def test_invalid_timeout_rejected(self, timeout):
        with pytest.raises(AdapterConfigurationError, match="Timeout"):
            MineturAdapter(timeout=timeout)

    def test_empty_user_agent_rejected(self):
        with pytest.raises(AdapterConfigurationError, match="user_agent"):
            MineturAdapter(timeout=30, user_agent="   ")

    def test_user_agent_header_set(self):
        adapter = MineturAdapter(timeout=30, user_agent=" Custom/2.0 ")

        assert adapter.user_agent == "Custom/2.0"
        assert adapter._session.headers["User-Agent"] == "Custom/2.0"

    def test_make_request_returns_json(self):
        adapter = MineturAdapter(timeout=30)
        with patch.object(adapter._session, "get", return_value=make_response(payload={"a": 1})) as mock_get:
            result = adapter._make_request("https://example.test/x", params={"q": "1"})

        assert result == {"a": 1}
        mock_get.assert_called_once_with("https://example.test/x", params={"q": "1"}, timeout=30)

    @pytest.mark.parametrize("status_code", [404, 500, 503])
    def test_make_request_http_error(self, status_code):
        adapter = MineturAdapter(timeout=30)
        response = make_response(status_code=status_code, reason="Error")
        with patch.object(adapter._session, "get", return_value=response):
            with pytest.raises(AdapterHTTPError) as exc_info:
                adapter._make_request("https://example.test/x")

        assert exc_info.value.status_code == status_code
        assert exc_info.value.url == "https://example.test/x"

    def test_make_request_timeout(self):
        adapter = MineturAdapter(timeout=30)
        with patch.object(adapter._session, "get", side_effect=requests.exceptions.Timeout()):
            with pytest.raises(AdapterTimeoutError, match="timed out after 30 seconds"):
                adapter._make_request("https://example.test/x")

    def test_make_request_connection_error(self):
        adapter = MineturAdapter(timeout=30)
        error = requests.exceptions.ConnectionError("refused")
        with patch.object(adapter._session, "get", side_effect=error):
            with pytest.raises(AdapterHTTPError) as exc_info:
                adapter._make_request("https://example.test/x")

        assert exc_info.value.status_code == 0

    def test_make_request_invalid_json(self):
        adapter = MineturAdapter(timeout=30)
        response = make_response(json_error=ValueError("Expecting value"))
        with patch.object(adapter._session, "get", return_value=response):
            with pytest.raises(AdapterResponseError, match="Failed to parse JSON"):
                adapter._make_request("https://example.test/x")

    def test_extract_records_returns_list_in_order(self, sample_payload):
        adapter = MineturAdapter(timeout=30)

        records = adapter._extract_records(sample_payload, "test")

        assert records is sample_payload[RECORDS_KEY]
        assert records[0]["Rótulo"] == "REPSOL"

    @pytest.mark.parametrize(
        "payload,match",
        [
            ([], "Expected JSON object"),
            ("oops", "Expected JSON object"),
            ({"Fecha": "x"}, "no 'ListaEESSPrecio'"),
            ({RECORDS_KEY: {"0": {}}}, "to be an array"),
            ({RECORDS_KEY: None}, "to be an array"),
        ],
    )
    def test_extract_records_rejects_malformed_payloads(self, payload, match):
        adapter = MineturAdapter(timeout=30)

        with pytest.raises(AdapterResponseError, match=match):
            adapter._extract_records(payload, "test")

    def test_extract_records_allows_empty_list(self):
        adapter = MineturAdapter(timeout=30)

        assert adapter._extract_records({RECORDS_KEY: []}, "test") == []

    def test_non_ok_result_status_is_logged(self):
        adapter = MineturAdapter(timeout=30)
        payload = {RECORDS_KEY: [], "ResultadoConsulta": "ERROR"}

        with patch("station_ranker.adapters.base.logger") as mock_logger:
            adapter._extract_records(payload, "test")

        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args[1]["extra"]["result_status"] == "ERROR"


# ============================================================================
# Minetur Adapter Tests
# ============================================================================


class TestMineturAdapter:
    """Tests for MineturAdapter."""

    def test_fetch_records_success(self, minetur_config, sample_payload):
        adapter = MineturAdapter(timeout=30)

        with patch.object(adapter, "_make_request", return_value=sample_payload) as mock_request:
            records = adapter.fetch_records(minetur_config)

        mock_request.assert_called_once_with(
            "https://example.test/PreciosCarburantes/EstacionesTerrestres/"
        )
        assert len(records) == 10

    def test_fetch_records_passes_raw_records_through(self, minetur_config, sample_payload):
        adapter = MineturAdapter(timeout=30)

        with patch.object(adapter, "_make_request", return_value=sample_payload):
            records = adapter.fetch_records(minetur_config)

        assert records[7]["Latitud"] == ""
        assert records[8]["Latitud"] == "N/A"

    def test_fetch_records_http_error_propagates(self, minetur_config):
        adapter = MineturAdapter(timeout=30)
        error = AdapterHTTPError("HTTP 500", status_code=500, url="x")

        with patch.object(adapter, "_make_request", side_effect=error):
            with pytest.raises(AdapterHTTPError):
                adapter.fetch_records(minetur_config)

    def test_fetch_records_missing_collection(self, minetur_config):
        adapter = MineturAdapter(timeout=30)

        with patch.object(adapter, "_make_request", return_value={"Nota": "x"}):
            with pytest.raises(AdapterResponseError):
                adapter.fetch_records(minetur_config)


# ============================================================================
# File Adapter Tests
# ============================================================================


class TestFileAdapter:
    """Tests for FileAdapter."""

    def test_reads_snapshot(self):
        adapter = FileAdapter(timeout=30)
        config = SourceConfig(type="file", path=FIXTURES_DIR / "stations_sample.json")

        records = adapter.fetch_records(config)

        assert len(records) == 10
        assert records[-1]["Municipio"] == "Salamanca"

    def test_reads_snapshot_with_bom(self, tmp_path):
        path = tmp_path / "bom.json"
        path.write_bytes("\ufeff".encode("utf-8") + json.dumps({RECORDS_KEY: [{"a": "b"}]}).encode("utf-8"))
        adapter = FileAdapter(timeout=30)

        records = adapter.fetch_records(SourceConfig(type="file", path=path))

        assert records == [{"a": "b"}]

    def test_missing_file_is_fetch_error(self, tmp_path):
        adapter = FileAdapter(timeout=30)
        config = SourceConfig(type="file", path=tmp_path / "missing.json")

        with pytest.raises(AdapterHTTPError) as exc_info:
            adapter.fetch_records(config)

        assert exc_info.value.status_code == 0

    def test_invalid_json_is_response_error(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        adapter = FileAdapter(timeout=30)

        with pytest.raises(AdapterResponseError, match="not valid JSON"):
            adapter.fetch_records(SourceConfig(type="file", path=path))

    def test_wrong_shape_is_response_error(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]", encoding="utf-8")
        adapter = FileAdapter(timeout=30)

        with pytest.raises(AdapterResponseError):
            adapter.fetch_records(SourceConfig(type="file", path=path))


# ============================================================================
# Factory Tests
# ============================================================================


class TestGetAdapter:
    """Tests for get_adapter factory."""

    def test_minetur_adapter(self, base_config):
        adapter = get_adapter(SourceConfig(), base_config)

        assert isinstance(adapter, MineturAdapter)
        assert adapter.timeout == 30

    def test_file_adapter(self, base_config, tmp_path):
        config = SourceConfig(type="file", path=tmp_path / "x.json")

        assert isinstance(get_adapter(config, base_config), FileAdapter)

    def test_settings_passed_through(self):
        advanced = AdvancedConfig(http_request_timeout=60, user_agent="Custom/3.0")

        adapter = get_adapter(SourceConfig(), advanced)

        assert adapter.timeout == 60
        assert adapter.user_agent == "Custom/3.0"

    def test_unknown_type(self, base_config):
        # Create a valid config first, then patch the type
        config = SourceConfig()
        config.type = "carrier-pigeon"

        with pytest.raises(AdapterConfigurationError, match="Unknown source type"):
            get_adapter(config, base_config)

    def test_adapter_errors_share_base_class(self):
        for error_class in (
            AdapterHTTPError,
            AdapterTimeoutError,
            AdapterResponseError,
            AdapterConfigurationError,
        ):
            assert issubclass(error_class, AdapterError)
