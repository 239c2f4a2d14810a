from datetime import datetime, UTC
from typing import cast

import pytest
from pytest import MonkeyPatch

from clickshortener.types import LambdaEvent, LambdaConfiguration
from clickshortener.models import UrlRecordModel
from clickshortener.dao.memory import UrlRecordMemoryDAO


@pytest.fixture(autouse=True)
def _env(monkeypatch: MonkeyPatch) -> None:
    """Run handlers as deployed, so unhandled errors become 500 responses."""
    monkeypatch.setenv('APP_ENV', 'test')
    monkeypatch.delenv('AWS_SAM_LOCAL', raising=False)


@pytest.fixture
def config() -> LambdaConfiguration:
    return cast(LambdaConfiguration, {'memory': {}})


@pytest.fixture
def record() -> UrlRecordModel:
    return UrlRecordModel(
        code='aB3xY9',
        target='https://example.com/blog/chuck-norris-is-awesome',
        created_at=datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC),
    )


@pytest.fixture
def url_record_dao(record: UrlRecordModel) -> UrlRecordMemoryDAO:
    return UrlRecordMemoryDAO({record.code: record})


@pytest.fixture
def path_event():
    """Build an API Gateway event for a /{shortcode} route."""

    def _path_event(shortcode: str | None, method: str = 'GET') -> LambdaEvent:
        return cast(LambdaEvent, {
            'resource': '/{shortcode}',
            'pathParameters': None if shortcode is None else {'shortcode': shortcode},
            'httpMethod': method,
            'path': f'/{shortcode or ""}',
            'requestContext': {'domainName': 'sho.rt', 'stage': 'test'},
        })

    return _path_event
