"""
Tests for the ASGI application and its AWS Lambda entry point.
"""
from unittest import mock

from django.test import SimpleTestCase
from mangum import Mangum

from config import asgi


class LambdaHandlerTest(SimpleTestCase):

    def setUp(self):
        self._saved = asgi._lambda_handler
        asgi._lambda_handler = None
        self.addCleanup(setattr, asgi, '_lambda_handler', self._saved)

    def test_wraps_django_application(self):
        handler = asgi.get_lambda_handler()
        self.assertIsInstance(handler, Mangum)
        self.assertIs(handler.app, asgi.application)

    def test_adapter_is_built_once_and_reused(self):
        adapter = mock.Mock(return_value={'statusCode': 200})
        event = {'rawPath': '/api/auth/me'}

        with mock.patch.object(asgi, 'get_lambda_handler', return_value=adapter) as build:
            self.assertEqual(asgi.lambda_handler(event, None), {'statusCode': 200})
            asgi.lambda_handler(event, None)

        build.assert_called_once_with()
        self.assertEqual(adapter.call_count, 2)
        adapter.assert_called_with(event, None)
