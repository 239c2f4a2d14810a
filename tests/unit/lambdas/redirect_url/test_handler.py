import json
from datetime import datetime, UTC
from typing import cast
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch
from freezegun import freeze_time

from clickshortener.types import LambdaContext, LambdaConfiguration
from clickshortener.lambdas.redirect_url import app
from clickshortener.dao.base import UrlRecordBaseDAO
from clickshortener.dao.exceptions import DataStoreError
from clickshortener.dao.memory import UrlRecordMemoryDAO


class TestRedirectUrlHandler:

    @pytest.fixture
    def context(self) -> LambdaContext:
        return cast(LambdaContext, {'function_name': 'redirect_url'})

    @pytest.fixture(autouse=True)
    def setup(
        self,
        monkeypatch: MonkeyPatch,
        context: LambdaContext,
        config: LambdaConfiguration,
        url_record_dao: UrlRecordMemoryDAO,
    ) -> None:
        # Patch Lambda dependencies
        self.load_config = MagicMock(return_value=config)
        monkeypatch.setattr(app, 'load_config', self.load_config)
        monkeypatch.setattr(app, 'url_record_dao', lambda *a, **kw: self.dao)

        self.context = context
        self.dao = url_record_dao

    @freeze_time('2025-10-16 08:30:00')
    def test_lambda_handler(self, path_event) -> None:
        response = app.lambda_handler(path_event('aB3xY9'), self.context)
        body = json.loads(response['body'])

        # Assert Lambda successfully redirects user to target URL
        assert response['statusCode'] == 302
        assert body == {}
        assert response['headers']['Location'] == 'https://example.com/blog/chuck-norris-is-awesome'
        self.load_config.assert_called_once_with('redirect_url')

        # Assert the click was counted
        record = self.dao.get('aB3xY9')
        assert record.click_count == 1
        assert record.last_accessed_at == datetime(2025, 10, 16, 8, 30, tzinfo=UTC)

    def test_lambda_handler_counts_every_redirect(self, path_event) -> None:
        for _ in range(3):
            app.lambda_handler(path_event('aB3xY9'), self.context)

        assert self.dao.get('aB3xY9').click_count == 3

    def test_lambda_handler_with_missing_shortcode(self, path_event) -> None:
        response = app.lambda_handler(path_event(None), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['message'] == "Bad Request (missing 'shortcode' in path)"
        assert body['errorCode'] == 'MISSING_SHORTCODE'

    @pytest.mark.parametrize('shortcode', ['zzzzzz', 'not-a-code'])
    def test_lambda_handler_with_unknown_shortcode(self, path_event, shortcode) -> None:
        before = self.dao.snapshot()

        response = app.lambda_handler(path_event(shortcode), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 404
        assert body['message'] == f"Not Found (short url https://sho.rt/{shortcode} doesn't exist)"
        assert body['errorCode'] == 'SHORT_URL_NOT_FOUND'
        assert self.dao.snapshot() == before

    def test_lambda_handler_with_unavailable_store(self, path_event) -> None:
        self.dao = MagicMock(spec=UrlRecordBaseDAO)
        self.dao.hit.side_effect = DataStoreError("Can't connect to Redis at redis:6379/0.")

        response = app.lambda_handler(path_event('aB3xY9'), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 503
        assert body['errorCode'] == 'DATA_STORE_UNAVAILABLE'

    def test_lambda_handler_with_unexpected_error(self, path_event) -> None:
        self.load_config.side_effect = RuntimeError('boom')

        response = app.lambda_handler(path_event('aB3xY9'), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 500
        assert body['errorCode'] == 'UNKNOWN_INTERNAL_SERVER_ERROR'
