"""Tests for the error hierarchy and error response mapping."""

import json

import pytest

from binance_api.exceptions import (
    APIError,
    BinanceError,
    EmptySymbolError,
    IncorrectAccountEventTypeError,
    IncorrectEventTypeError,
    InvalidApiKeyError,
    InvalidSignatureError,
    MalformedErrorBody,
    MalformedResponseError,
    MinStrategyTypeError,
    NilRequestError,
    OrderNotFoundError,
    OrderRejectedError,
    RateLimitError,
    RequestValidationError,
    StreamError,
    StreamOverflowError,
    TimestampError,
    create_api_error,
)


class TestCreateApiError:

    @pytest.mark.parametrize("status_code", [418, 429])
    def test_rate_limit_statuses(self, status_code):
        error = create_api_error(status_code, "Too many requests", -1003, retry_after=30)

        assert type(error) is RateLimitError
        assert error.retry_after == 30
        assert error.status_code == status_code

    @pytest.mark.parametrize("code, error_class", [
        (-1021, TimestampError),
        (-1022, InvalidSignatureError),
        (-2010, OrderRejectedError),
        (-2011, OrderRejectedError),
        (-2013, OrderNotFoundError),
        (-2014, InvalidApiKeyError),
        (-2015, InvalidApiKeyError),
        (-1121, APIError),
    ])
    def test_code_mapping(self, code, error_class):
        error = create_api_error(400, "failed", code)

        assert type(error) is error_class
        assert error.code == code
        assert error.message == "failed"

    def test_str_renders_exchange_payload(self):
        error = create_api_error(400, "Invalid symbol.", -1121)
        assert json.loads(str(error)) == {"code": -1121, "msg": "Invalid symbol."}

    def test_all_are_binance_errors(self):
        assert isinstance(create_api_error(429, "", 0), APIError)
        assert issubclass(APIError, BinanceError)
        assert issubclass(MalformedResponseError, BinanceError)
        assert issubclass(StreamError, BinanceError)


class TestValidationErrors:

    def test_value_error_subclass(self):
        with pytest.raises(ValueError):
            raise EmptySymbolError()

    @pytest.mark.parametrize("error_class, message", [
        (NilRequestError, "request is nil"),
        (EmptySymbolError, "symbol are missing"),
        (MinStrategyTypeError, "strategy type must be at least 1000000"),
    ])
    def test_default_messages(self, error_class, message):
        assert str(error_class()) == message

    def test_custom_message(self):
        error = RequestValidationError("invalid depth level: 15")
        assert error.message == "invalid depth level: 15"


class TestMalformedResponse:

    def test_body_truncated(self):
        error = MalformedResponseError(200, "Expected `object`", b"x" * 500)

        assert len(error.body) == 200
        assert str(error) == "HTTP 200: Expected `object`"

    def test_error_body_variant(self):
        error = MalformedErrorBody(502, "not a code/msg object", b"<html>")
        assert isinstance(error, MalformedResponseError)
        assert error.status_code == 502


class TestStreamErrors:

    def test_account_alias(self):
        assert IncorrectAccountEventTypeError is IncorrectEventTypeError
        assert str(IncorrectEventTypeError()) == "cant unmarshal event type"

    def test_overflow_is_stream_error(self):
        assert issubclass(StreamOverflowError, StreamError)
