"""Unit tests for the exception handler helper.

This module exercises the full pipeline behind `ExceptionHandlerHelper`:
classification, code and HTTP status resolution, message rendering, and
envelope assembly, for every failure type.
"""

import json
from unittest.mock import patch

import pytest
from fastapi import HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field, ValidationError

from api_envelope.core.config import ExceptionHandlerConfig, Settings
from api_envelope.handlers.exception_handler import (
    ExceptionHandlerHelper,
    build_debug_trace,
    field_errors,
)
from api_envelope.handlers.messages import exception_placeholders
from api_envelope.i18n import Translator
from api_envelope.utils.error_codes import ApiCode, FailureType, MessageKeys
from api_envelope.utils.exceptions import (
    AuthenticationError,
    UnknownApiCodeError,
    ValidationFailedError,
)
from tests.fixtures.common_mocks import raised


class _Article(BaseModel):
    title: str = Field(min_length=10)
    views: int


def _body(response) -> dict:
    return json.loads(response.body)


def _assert_valid_envelope(body: dict) -> None:
    assert body["success"] is False
    assert isinstance(body["code"], int)
    assert isinstance(body["message"], str) and body["message"]
    assert "data" in body


def _expected_message(error: BaseException, api_code: int) -> str:
    key = MessageKeys.KEYS[ApiCode(api_code)]
    return Translator().lookup(key, exception_placeholders(error, api_code))


@pytest.mark.unit
class TestUnauthenticated:
    """A test suite for authentication failures."""

    def test_unauthenticated(self, helper):
        """Tests an `AuthenticationError` without a message."""
        error = AuthenticationError()

        response = helper.unauthenticated(None, error)
        body = _body(response)

        _assert_valid_envelope(body)
        assert body["data"] is None
        assert body["code"] == ApiCode.EX_AUTHENTICATION_EXCEPTION
        assert body["message"] == _expected_message(error, ApiCode.EX_AUTHENTICATION_EXCEPTION)
        assert response.status_code == 401

    def test_blank_message_substituted_by_class_name(self, make_settings):
        """Tests that the class name reaches a template using `{message}`."""
        translator = Translator(
            catalogs={"en": {"api.authentication_exception": "Not authenticated ({message})"}}
        )
        helper = ExceptionHandlerHelper(settings=make_settings(), translator=translator)

        body = _body(helper.render(None, AuthenticationError("  ")))

        assert body["message"] == "Not authenticated (api_envelope.utils.exceptions.AuthenticationError)"


@pytest.mark.unit
class TestRender:
    """A test suite for `ExceptionHandlerHelper.render`."""

    @pytest.mark.parametrize(
        "error, expected_http_code, expected_api_code",
        [
            (HTTPException(status_code=404), 404, ApiCode.EX_HTTP_NOT_FOUND),
            (HTTPException(status_code=503), 503, ApiCode.EX_HTTP_SERVICE_UNAVAILABLE),
            (HTTPException(status_code=400), 400, ApiCode.EX_HTTP_EXCEPTION),
            (HTTPException(status_code=401), 401, ApiCode.EX_AUTHENTICATION_EXCEPTION),
            (RuntimeError(), 500, ApiCode.EX_UNCAUGHT_EXCEPTION),
        ],
    )
    def test_render_failure_types(self, helper, error, expected_http_code, expected_api_code):
        """Tests status, code and message for each non-validation failure type."""
        response = helper.render(None, error)
        body = _body(response)

        _assert_valid_envelope(body)
        assert body["data"] is None
        assert body["code"] == expected_api_code
        assert body["message"] == _expected_message(error, expected_api_code)
        assert response.status_code == expected_http_code

    def test_http_not_found_with_empty_config(self, helper):
        """Tests that the exception's own 404 is used when nothing is configured."""
        response = helper.render(None, HTTPException(status_code=404))

        assert response.status_code == 404
        assert _body(response)["code"] == ApiCode.EX_HTTP_NOT_FOUND

    def test_http_exception_detail_in_message(self, helper):
        body = _body(helper.render(None, HTTPException(status_code=409, detail="Order already paid")))
        assert body["message"] == "HTTP exception: Order already paid"

    def test_uncaught_message(self, helper):
        body = _body(helper.render(None, ValueError("  unexpected  ")))
        assert body["message"] == "Uncaught exception: unexpected"

    def test_validation_failure(self, helper):
        """Tests that a field failing two rules yields two ordered messages."""
        messages = ["The title field is required.", "The title must be at least 10 characters."]
        response = helper.render(None, ValidationFailedError({"title": messages}))
        body = _body(response)

        _assert_valid_envelope(body)
        assert response.status_code == 400
        assert body["code"] == ApiCode.EX_VALIDATION_EXCEPTION
        assert body["data"]["messages"]["title"] == messages

    def test_configured_overrides(self, make_settings):
        settings = make_settings(exception={"uncaught_exception": {"http_code": 503, "code": 11}})
        response = ExceptionHandlerHelper(settings=settings).render(None, RuntimeError("x"))

        assert response.status_code == 503
        assert _body(response)["code"] == ApiCode.EX_HTTP_SERVICE_UNAVAILABLE

    def test_configured_user_code(self, make_settings, registry, translator):
        settings = make_settings(exception={"http_exception": {"code": 200}})
        helper = ExceptionHandlerHelper(settings=settings, registry=registry, translator=translator)

        body = _body(helper.render(None, HTTPException(status_code=409, detail="duplicate")))

        assert body["code"] == 200
        assert body["message"] == "Order rejected: duplicate"

    def test_unmapped_user_code_is_fatal(self, make_settings):
        """Tests that a code without a message key is not masked."""
        settings = make_settings(exception={"uncaught_exception": {"code": 300}})
        helper = ExceptionHandlerHelper(settings=settings)

        with pytest.raises(UnknownApiCodeError):
            helper.render(None, RuntimeError())

    def test_settings_read_per_call(self, make_settings):
        """Tests that a helper without settings follows the current settings."""
        helper = ExceptionHandlerHelper(translator=Translator())

        with patch(
            "api_envelope.handlers.exception_handler.get_settings",
            return_value=make_settings(debug_trace_enabled=True),
        ):
            assert "debug" in _body(helper.render(None, RuntimeError()))

        with patch(
            "api_envelope.handlers.exception_handler.get_settings",
            return_value=make_settings(debug_trace_enabled=False),
        ):
            assert "debug" not in _body(helper.render(None, RuntimeError()))

    @pytest.mark.parametrize(
        "error, expected_http_code",
        [
            (RequestValidationError([]), 422),
            (ValidationFailedError({"title": ["required"]}), 422),
            (HTTPException(status_code=409), 409),
            (AuthenticationError(), 401),
            (RuntimeError(), 500),
        ],
    )
    def test_configured_default_error_status(self, error, expected_http_code):
        """Tests that the generic error status only replaces the 400 fallback."""
        settings = Settings(exception_handler=ExceptionHandlerConfig(default_http_code_error=422))

        response = ExceptionHandlerHelper(settings=settings).render(None, error)

        assert response.status_code == expected_http_code

    def test_authentication_guards_are_logged(self, helper):
        with patch("api_envelope.handlers.exception_handler.logger") as mock_logger:
            helper.unauthenticated(None, AuthenticationError("expired", guards=["api"]))

        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.kwargs["guards"] == ["api"]

    def test_guards_omitted_when_empty(self, helper):
        with patch("api_envelope.handlers.exception_handler.logger") as mock_logger:
            helper.unauthenticated(None, AuthenticationError())

        assert "guards" not in mock_logger.warning.call_args.kwargs


@pytest.mark.unit
class TestDebugTrace:
    """A test suite for debug trace data."""

    def test_debug_node_present_when_enabled(self, make_settings):
        helper = ExceptionHandlerHelper(settings=make_settings(debug_trace_enabled=True))

        body = _body(helper.render(None, raised(RuntimeError())))

        _assert_valid_envelope(body)
        assert body["data"] is None
        assert "debug" in body
        assert body["debug"]["trace"]["class"] == "RuntimeError"

    def test_debug_node_absent_by_default(self, helper):
        assert "debug" not in _body(helper.render(None, raised(RuntimeError())))

    def test_custom_trace_key(self):
        settings = Settings(
            exception_handler=ExceptionHandlerConfig(debug_trace_enabled=True, debug_trace_key="where")
        )
        body = _body(ExceptionHandlerHelper(settings=settings).render(None, RuntimeError()))
        assert "where" in body["debug"]

    def test_build_debug_trace_points_at_raise_site(self):
        trace = build_debug_trace(raised(KeyError("k")))

        assert trace["class"] == "KeyError"
        assert trace["file"].endswith("common_mocks.py")
        assert isinstance(trace["line"], int)

    def test_build_debug_trace_without_traceback(self):
        assert build_debug_trace(ValueError()) == {"class": "ValueError", "file": None, "line": None}


@pytest.mark.unit
class TestFallbackMechanism:
    """Tests that invalid configured HTTP codes are dropped in favour of the exception's."""

    def _run(self, make_settings, error, config_http_code, fallback_http_code):
        settings = make_settings(
            exception={
                FailureType.HTTP_NOT_FOUND: {
                    "http_code": config_http_code,
                    "code": int(ApiCode.EX_HTTP_NOT_FOUND),
                }
            }
        )
        helper = ExceptionHandlerHelper(settings=settings)
        return helper.build_envelope(error, FailureType.HTTP_NOT_FOUND, fallback_http_code)

    def test_falls_back_to_exception_status_code(self, make_settings):
        """Config 200 is invalid, the exception carries a valid 400, fallback 0 is unused."""
        envelope = self._run(make_settings, HTTPException(status_code=400), 200, 0)
        assert envelope.http_code == 400

    def test_falls_back_to_provided_value(self, make_settings):
        """Both config and exception carry 200, so the supplied fallback wins."""
        envelope = self._run(make_settings, HTTPException(status_code=200), 200, 400)
        assert envelope.http_code == 400

    def test_invalid_provided_value_is_passed_through(self, make_settings):
        envelope = self._run(make_settings, RuntimeError(), 0, 0)
        assert envelope.http_code == 0

    def test_error_returns_response(self, make_settings):
        settings = make_settings(exception={"http_not_found": {"http_code": 200}})
        response = ExceptionHandlerHelper(settings=settings).error(
            HTTPException(status_code=400), FailureType.HTTP_NOT_FOUND, 0
        )
        assert response.status_code == 400
        assert _body(response)["code"] == ApiCode.EX_HTTP_NOT_FOUND


@pytest.mark.unit
class TestFieldErrors:
    """A test suite for validation payload extraction."""

    def test_validation_failed_error_passthrough(self):
        errors = {"email": ["invalid", "taken"], "name": ["required"]}
        assert field_errors(ValidationFailedError(errors)) == errors

    def test_request_validation_error_grouped_by_field(self):
        error = RequestValidationError(
            [
                {"loc": ("body", "title"), "msg": "field required", "type": "missing"},
                {"loc": ("body", "title"), "msg": "too short", "type": "string_too_short"},
                {"loc": ("query", "page"), "msg": "not an int", "type": "int_parsing"},
                {"loc": ("body", "items", 0, "sku"), "msg": "required", "type": "missing"},
            ]
        )

        assert field_errors(error) == {
            "title": ["field required", "too short"],
            "page": ["not an int"],
            "items.0.sku": ["required"],
        }

    def test_body_level_error(self):
        error = RequestValidationError([{"loc": ("body",), "msg": "invalid json", "type": "json_invalid"}])
        assert field_errors(error) == {"body": ["invalid json"]}

    def test_pydantic_validation_error(self):
        try:
            _Article(title="short", views="many")
        except ValidationError as exc:
            errors = field_errors(exc)

        assert list(errors) == ["title", "views"]
        assert len(errors["title"]) == 1

    def test_non_validation_error(self):
        assert field_errors(RuntimeError()) == {}

    def test_pydantic_error_rendered_as_validation(self, helper):
        try:
            _Article(title="short", views=1)
        except ValidationError as exc:
            response = helper.render(None, exc)

        body = _body(response)
        assert response.status_code == 400
        assert body["code"] == ApiCode.EX_VALIDATION_EXCEPTION
        assert "title" in body["data"]["messages"]
