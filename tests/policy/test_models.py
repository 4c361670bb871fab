"""Tests for CorsPolicy, CorsFragment and PolicyResult."""

import pydantic
import pytest

from serverless_cors.kernel.exceptions import ConfigurationException
from serverless_cors.policy import DISABLED, CorsFragment, CorsPolicy, Disabled, PolicyResult


class TestCorsPolicy:
    def test_accepts_camel_case_keys(self):
        policy = CorsPolicy.model_validate(
            {"allowOrigin": "*", "allowHeaders": ["X-Api-Key"], "allowCredentials": True, "maxAge": 60}
        )
        assert policy.allow_origin == "*"
        assert policy.allow_headers == ["X-Api-Key"]
        assert policy.allow_credentials is True
        assert policy.max_age == 60
        assert policy.expose_headers is None

    def test_is_frozen(self):
        policy = CorsPolicy(allowOrigin="*")
        with pytest.raises(pydantic.ValidationError):
            policy.allow_origin = "http://other.test"  # type: ignore[misc]


class TestCorsFragment:
    def test_explicit_values_only(self):
        fragment = CorsFragment.model_validate({"allowOrigin": "*", "maxAge": None})
        assert fragment.explicit_values() == {"allowOrigin": "*", "maxAge": None}

    def test_values_are_not_typed_yet(self):
        fragment = CorsFragment.model_validate({"allowHeaders": "not-a-list"})
        assert fragment.allow_headers == "not-a-list"


class TestPolicyResult:
    def test_disabled_singleton(self):
        assert Disabled() is DISABLED
        assert not DISABLED

    def test_disabled_result(self):
        result = PolicyResult()
        assert result.disabled and result.ok
        assert result.unwrap() is DISABLED

    def test_policy_result(self):
        policy = CorsPolicy(allowOrigin="*")
        result = PolicyResult(policy=policy)
        assert not result.disabled
        assert result.unwrap() is policy

    def test_error_result(self):
        error = ConfigurationException("bad")
        result = PolicyResult(error=error)
        assert not result.ok
        assert not result.disabled
        with pytest.raises(ConfigurationException):
            result.unwrap()
