import json
from typing import cast
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch

from clickshortener.types import LambdaContext, LambdaConfiguration
from clickshortener.lambdas.delete_url import app
from clickshortener.dao.base import UrlRecordBaseDAO
from clickshortener.dao.exceptions import DataStoreError
from clickshortener.dao.memory import UrlRecordMemoryDAO


class TestDeleteUrlHandler:

    @pytest.fixture
    def context(self) -> LambdaContext:
        return cast(LambdaContext, {'function_name': 'delete_url'})

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

    def test_lambda_handler(self, path_event, record) -> None:
        response = app.lambda_handler(path_event('aB3xY9', method='DELETE'), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 200
        assert body == {'message': 'Successfully deleted https://sho.rt/aB3xY9', 'shortcode': 'aB3xY9'}
        assert self.dao.snapshot() == {}
        assert self.dao.find(record.target) is None
        self.load_config.assert_called_once_with('delete_url')

    def test_lambda_handler_twice(self, path_event) -> None:
        app.lambda_handler(path_event('aB3xY9', method='DELETE'), self.context)
        response = app.lambda_handler(path_event('aB3xY9', method='DELETE'), self.context)

        assert response['statusCode'] == 404
        assert json.loads(response['body'])['errorCode'] == 'SHORT_URL_NOT_FOUND'

    def test_lambda_handler_with_missing_shortcode(self, path_event) -> None:
        response = app.lambda_handler(path_event(None, method='DELETE'), self.context)

        assert response['statusCode'] == 400
        assert json.loads(response['body'])['errorCode'] == 'MISSING_SHORTCODE'

    @pytest.mark.parametrize('shortcode', ['zzzzzz', '../etc'])
    def test_lambda_handler_with_unknown_shortcode(self, path_event, shortcode) -> None:
        response = app.lambda_handler(path_event(shortcode, method='DELETE'), self.context)

        assert response['statusCode'] == 404
        assert len(self.dao.snapshot()) == 1

    def test_lambda_handler_with_unavailable_store(self, path_event) -> None:
        self.dao = MagicMock(spec=UrlRecordBaseDAO)
        self.dao.delete.side_effect = DataStoreError('down')

        response = app.lambda_handler(path_event('aB3xY9', method='DELETE'), self.context)

        assert response['statusCode'] == 503
