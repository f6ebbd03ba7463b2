"""
Global pytest fixtures for the exporter test suite.

Provides:
- Test environment settings (set before any package import)
- In-process async paginator and client fakes
- A recording call-counter sink
"""
import os

os.environ["TESTING"] = "true"
os.environ.pop("AWS_ROLE_ARN", None)
os.environ.pop("AWS_ENDPOINT_URL", None)
os.environ.pop("LABELS_SNAKE_CASE", None)

from collections.abc import AsyncIterator
from typing import Any, Callable, Dict, List, Optional

import pytest
from botocore.exceptions import ClientError

from cloudtag_exporter.shared.adapters.aws_utils import DiscoveryClients
from cloudtag_exporter.shared.core.config import get_settings


class FakePaginator:
    """
    Serves canned pages through the aiobotocore `paginate(...)` async-iterator shape.

    When `error` is set it is raised once `fail_after` pages have been served.
    """

    def __init__(
        self,
        pages: List[Dict[str, Any]],
        error: Optional[Exception] = None,
        fail_after: int = 0,
    ) -> None:
        self.pages = pages
        self.error = error
        self.fail_after = fail_after
        self.calls: List[Dict[str, Any]] = []
        self.pages_served = 0

    def paginate(self, **kwargs: Any) -> AsyncIterator[Dict[str, Any]]:
        self.calls.append(kwargs)

        async def _iter() -> AsyncIterator[Dict[str, Any]]:
            for idx, page in enumerate(self.pages):
                if self.error is not None and idx == self.fail_after:
                    raise self.error
                self.pages_served += 1
                yield page
            if self.error is not None and self.fail_after >= len(self.pages):
                raise self.error

        return _iter()


class FakeClient:
    def __init__(self, paginators: Dict[str, FakePaginator]) -> None:
        self.paginators = paginators

    def get_paginator(self, operation_name: str) -> FakePaginator:
        return self.paginators[operation_name]


class RecordingCallCounter:
    def __init__(self) -> None:
        self.calls: List[str] = []

    def inc(self, api: str) -> None:
        self.calls.append(api)

    def count(self, api: str) -> int:
        return self.calls.count(api)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached process-wide; rebuild them around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def recording_counter() -> RecordingCallCounter:
    return RecordingCallCounter()


@pytest.fixture
def paginator_factory() -> Callable[..., FakePaginator]:
    return FakePaginator


@pytest.fixture
def make_clients() -> Callable[..., DiscoveryClients]:
    """Build DiscoveryClients from `{operation_name: FakePaginator}` per client."""

    def _make(
        tagging: Optional[Dict[str, FakePaginator]] = None,
        autoscaling: Optional[Dict[str, FakePaginator]] = None,
        apigateway: Optional[Dict[str, FakePaginator]] = None,
        ec2: Optional[Dict[str, FakePaginator]] = None,
    ) -> DiscoveryClients:
        return DiscoveryClients(
            tagging=FakeClient(tagging or {}),
            autoscaling=FakeClient(autoscaling or {}),
            apigateway=FakeClient(apigateway or {}),
            ec2=FakeClient(ec2 or {}),
        )

    return _make


@pytest.fixture
def throttling_error() -> ClientError:
    return ClientError(
        {"Error": {"Code": "ThrottlingException", "Message": "Rate exceeded"}},
        "GetResources",
    )
