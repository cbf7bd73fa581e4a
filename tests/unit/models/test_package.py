"""Tests for package and retry models."""

import pytest

from ondemand.models.package import PackageSpec, RetryPolicy


def test_spec_without_version_requests_latest() -> None:
    spec = PackageSpec("left-pad")

    assert spec.requested_version == "latest"
    assert spec.requirement == "left-pad"


def test_spec_with_version_pins_requirement() -> None:
    spec = PackageSpec("left-pad", "1.3.0")

    assert spec.requested_version == "1.3.0"
    assert spec.requirement == "left-pad==1.3.0"


def test_literal_latest_is_not_pinned() -> None:
    assert PackageSpec("left-pad", "latest").requirement == "left-pad"


def test_retry_policy_defaults() -> None:
    policy = RetryPolicy()

    assert policy.max_retries == 3
    assert policy.force_install is False


def test_retry_policy_rejects_negative_budget() -> None:
    with pytest.raises(ValueError, match="max_retries"):
        RetryPolicy(max_retries=-1)
