"""Tests for quote parsing and the error types."""

import math

import pytest

from stockmonitor.errors import PartialDataError, UpstreamError, ValidationError
from stockmonitor.schemas import Quote, parse_float


class TestParseFloat:
    @pytest.mark.parametrize("raw, expected", [
        ("189.25", 189.25),
        ("-1.5", -1.5),
        ("  42", 42.0),
        ("12.5abc", 12.5),
        (".5", 0.5),
        ("-1e3x", -1000.0),
        ("3.", 3.0),
        (7, 7.0),
        (2.5, 2.5),
    ])
    def test_numeric_prefix(self, raw, expected):
        assert parse_float(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "N/A", "abc1", "inf", True])
    def test_not_a_number(self, raw):
        assert math.isnan(parse_float(raw))

    def test_infinity_literal(self):
        assert parse_float("Infinity") == math.inf
        assert parse_float("-Infinity") == -math.inf


class TestQuote:
    def test_from_provider_maps_close_to_price(self):
        quote = Quote.from_provider({
            "symbol": "TSLA", "name": "Tesla Inc", "close": "212.19", "open": "210.00", "percent_change": "1.04",
        })
        assert quote == Quote(symbol="TSLA", name="Tesla Inc", price=212.19, percent_change=1.04, open=210.0)

    def test_payload_writes_nan_as_null(self):
        quote = Quote.from_provider({"symbol": "TSLA", "close": "N/A", "open": "1", "percent_change": None})
        assert quote.to_payload() == {
            "symbol": "TSLA", "name": "", "price": None, "percent_change": None, "open": 1.0,
        }

    def test_from_payload_reads_null_as_nan(self):
        quote = Quote.from_payload("TSLA", {"name": "Tesla", "price": None, "percent_change": 2, "open": 1.5})
        assert quote.symbol == "TSLA"
        assert math.isnan(quote.price)
        assert quote.percent_change == 2.0

    def test_placeholder_is_zero_valued(self):
        assert Quote.placeholder("AMZN") == Quote(symbol="AMZN", name="", price=0, percent_change=0, open=0)


class TestErrors:
    def test_upstream_rate_limit(self):
        error = UpstreamError.from_payload({"status": "error", "code": 429, "message": "slow down"})
        assert error.status_code == 429
        assert error.to_dict() == {"error": "slow down", "code": 429}

    def test_upstream_other_code(self):
        error = UpstreamError.from_payload({"status": "error", "code": 401, "message": "bad key"})
        assert error.status_code == 400

    def test_validation_error_status(self):
        error = ValidationError("Symbol parameter is required")
        assert error.status_code == 400
        assert error.to_dict() == {"error": "Symbol parameter is required"}

    def test_partial_data_error_keeps_symbol(self):
        error = PartialDataError("MSFT", "boom")
        assert error.symbol == "MSFT"
        assert str(error) == "boom"
