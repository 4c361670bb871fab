"""Tests for the pydantic validation helper."""

import pytest
from pydantic import BaseModel

from serverless_cors.kernel.exceptions import ConfigurationException
from serverless_cors.validation.helpers import format_errors, validate_model


class Settings(BaseModel):
    name: str
    retries: int


class TestValidateModel:
    def test_valid_data(self):
        result = validate_model(Settings, {"name": "users", "retries": 3})
        assert result.name == "users"
        assert result.retries == 3

    def test_invalid_data_raises_configuration_exception(self):
        with pytest.raises(ConfigurationException) as exc_info:
            validate_model(Settings, {"name": "users", "retries": "many"})
        assert exc_info.value.code == "CORS_CONFIGURATION_ERROR"
        assert "retries" in str(exc_info.value)
        assert exc_info.value.context["model"] == "Settings"

    def test_missing_required_field(self):
        with pytest.raises(ConfigurationException, match="name"):
            validate_model(Settings, {"retries": 1})

    def test_non_mapping_input(self):
        with pytest.raises(ConfigurationException, match="<root>"):
            validate_model(Settings, "not-a-mapping")


class TestFormatErrors:
    def test_joins_location_and_message(self):
        errors = [
            {"loc": ("allowHeaders", 0), "msg": "bad"},
            {"loc": ("allowOrigin",), "msg": "missing"},
        ]
        assert format_errors(errors) == "allowHeaders.0: bad; allowOrigin: missing"
