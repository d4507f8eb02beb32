# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import unittest
from unittest.mock import MagicMock, patch

import requests
from azure.core.credentials import TokenCredential

from reso_client import ResoClient, ResoConfig, StaticTokenCredential
from reso_client.core.errors import ConfigError
from reso_client.data._odata import _ODataClient
from reso_client.operations.metadata import MetadataOperations
from reso_client.operations.query import QueryOperations
from reso_client.operations.replication import ReplicationOperations


class TestResoClientConstruction(unittest.TestCase):
    def setUp(self):
        self.mock_credential = MagicMock(spec=TokenCredential)
        self.base_url = "https://api.mls.example/odata"

    def test_namespaces(self):
        client = ResoClient(self.base_url, self.mock_credential, ResoConfig())
        self.assertIsInstance(client.query, QueryOperations)
        self.assertIsInstance(client.replication, ReplicationOperations)
        self.assertIsInstance(client.metadata, MetadataOperations)

    def test_trailing_slash_removed(self):
        client = ResoClient(self.base_url + "/", self.mock_credential, ResoConfig())
        self.assertEqual(client.base_url, self.base_url)

    def test_empty_base_url_rejected(self):
        for value in ("", "/", None):
            with self.subTest(value=value):
                with self.assertRaises(ConfigError):
                    ResoClient(value, self.mock_credential)

    def test_invalid_credential_rejected(self):
        with self.assertRaises(TypeError):
            ResoClient(self.base_url, "token-string")

    def test_config_defaults_from_env(self):
        with patch.dict("os.environ", {"RESO_DATASET_ID": "ds9"}):
            client = ResoClient(self.base_url, self.mock_credential)
        self.assertEqual(client.config.dataset_id, "ds9")

    def test_odata_client_created_lazily(self):
        client = ResoClient(self.base_url, self.mock_credential, ResoConfig(dataset_id="x"))
        self.assertIsNone(client._odata)
        od = client._get_odata()
        self.assertIsInstance(od, _ODataClient)
        self.assertIs(client._get_odata(), od)
        self.assertEqual(od.base_url, self.base_url)
        self.assertEqual(od.config.dataset_id, "x")


class TestResoClientFromEnv(unittest.TestCase):
    def test_from_env(self):
        env = {
            "RESO_BASE_URL": "https://api.mls.example/odata/",
            "RESO_TOKEN": "env-token",
            "RESO_DATASET_ID": "actris_ref",
            "RESO_TIMEOUT": "12",
        }
        with patch.dict("os.environ", env, clear=True):
            client = ResoClient.from_env()
        self.assertEqual(client.base_url, "https://api.mls.example/odata")
        self.assertEqual(client.config.dataset_id, "actris_ref")
        self.assertEqual(client.config.http_timeout, 12.0)
        self.assertIsInstance(client.auth.credential, StaticTokenCredential)
        self.assertEqual(client.auth._acquire_token("s").access_token, "env-token")

    def test_missing_base_url(self):
        with patch.dict("os.environ", {"RESO_TOKEN": "t"}, clear=True):
            with self.assertRaises(ConfigError) as ctx:
                ResoClient.from_env()
        self.assertIn("RESO_BASE_URL", ctx.exception.message)

    def test_missing_token(self):
        with patch.dict("os.environ", {"RESO_BASE_URL": "https://x.example"}, clear=True):
            with self.assertRaises(ConfigError) as ctx:
                ResoClient.from_env()
        self.assertIn("RESO_TOKEN", ctx.exception.message)


class TestContextManager(unittest.TestCase):
    def setUp(self):
        self.mock_credential = MagicMock(spec=TokenCredential)
        self.base_url = "https://api.mls.example/odata"

    def test_enter_creates_session(self):
        client = ResoClient(self.base_url, self.mock_credential, ResoConfig())
        self.assertIsNone(client._session)
        result = client.__enter__()
        self.assertIsInstance(client._session, requests.Session)
        self.assertTrue(client._owns_session)
        self.assertIs(result, client)
        client.close()

    def test_session_passed_to_odata_client(self):
        with ResoClient(self.base_url, self.mock_credential, ResoConfig()) as client:
            od = client._get_odata()
            self.assertIs(od._http._session, client._session)

    def test_exit_closes_session(self):
        client = ResoClient(self.base_url, self.mock_credential, ResoConfig())
        client.__enter__()
        mock_session = MagicMock(spec=requests.Session)
        client._session = mock_session
        client.__exit__(None, None, None)
        mock_session.close.assert_called_once()
        self.assertIsNone(client._session)
        self.assertFalse(client._owns_session)
        self.assertIsNone(client._odata)

    def test_close_idempotent(self):
        client = ResoClient(self.base_url, self.mock_credential, ResoConfig())
        client.__enter__()
        client.close()
        client.close()
        client.close()

    def test_close_without_enter(self):
        client = ResoClient(self.base_url, self.mock_credential, ResoConfig())
        client._get_odata()
        client.close()
        self.assertIsNone(client._odata)

    def test_exceptions_not_suppressed(self):
        with self.assertRaises(RuntimeError):
            with ResoClient(self.base_url, self.mock_credential, ResoConfig()):
                raise RuntimeError("boom")


if __name__ == "__main__":
    unittest.main()
