# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import unittest
from unittest.mock import MagicMock, call

from azure.core.credentials import TokenCredential

from reso_client import ReplicationQueryBuilder, ReplicationResponse, ResoClient, ResoConfig
from reso_client.core.errors import ServerError


def _page(n, next_link=None):
    return ReplicationResponse([{"ListingKey": str(i)} for i in range(n)], next_link)


class TestReplicationOperations(unittest.TestCase):
    """Tests for the client.replication namespace."""

    def setUp(self):
        self.mock_credential = MagicMock(spec=TokenCredential)
        self.client = ResoClient("https://api.mls.example/odata", self.mock_credential, ResoConfig())
        self.client._odata = MagicMock()
        self.query = ReplicationQueryBuilder("Property").top(2000).build()

    def test_builder(self):
        q = self.client.replication.builder("Member").top(10).build()
        self.assertEqual(q.to_odata_string(), "Member/replication?$top=10")

    def test_execute(self):
        first = _page(2, "https://n.example/1")
        self.client._odata._execute_replication.return_value = first

        page = self.client.replication.execute(self.query)

        self.client._odata._execute_replication.assert_called_once_with(self.query)
        self.assertIs(page, first)
        self.assertTrue(page.has_more())

    def test_execute_next_link(self):
        self.client._odata._execute_next_link.return_value = _page(1)
        page = self.client.replication.execute_next_link("https://n.example/1")
        self.client._odata._execute_next_link.assert_called_once_with("https://n.example/1")
        self.assertFalse(page.has_more())

    def test_iter_pages_walks_until_no_next_link(self):
        self.client._odata._execute_replication.return_value = _page(2000, "https://n.example/1")
        self.client._odata._execute_next_link.side_effect = [
            _page(2000, "https://n.example/2"),
            _page(5),
        ]

        pages = list(self.client.replication.iter_pages(self.query))

        self.assertEqual([p.record_count for p in pages], [2000, 2000, 5])
        self.assertEqual(
            self.client._odata._execute_next_link.call_args_list,
            [call("https://n.example/1"), call("https://n.example/2")],
        )

    def test_iter_pages_single_page(self):
        self.client._odata._execute_replication.return_value = _page(0)
        pages = list(self.client.replication.iter_pages(self.query))
        self.assertEqual(len(pages), 1)
        self.client._odata._execute_next_link.assert_not_called()

    def test_iter_pages_max_pages(self):
        self.client._odata._execute_replication.return_value = _page(1, "https://n.example/1")
        self.client._odata._execute_next_link.return_value = _page(1, "https://n.example/again")

        pages = list(self.client.replication.iter_pages(self.query, max_pages=3))

        self.assertEqual(len(pages), 3)
        self.assertEqual(self.client._odata._execute_next_link.call_count, 2)

    def test_iter_pages_zero_max_pages_fetches_nothing(self):
        pages = list(self.client.replication.iter_pages(self.query, max_pages=0))
        self.assertEqual(pages, [])
        self.client._odata._execute_replication.assert_not_called()

    def test_iter_pages_is_lazy(self):
        self.client._odata._execute_replication.return_value = _page(1, "https://n.example/1")
        self.client._odata._execute_next_link.return_value = _page(1)

        it = self.client.replication.iter_pages(self.query)
        self.client._odata._execute_replication.assert_not_called()
        next(it)
        self.client._odata._execute_next_link.assert_not_called()

    def test_iter_pages_error_propagates(self):
        self.client._odata._execute_replication.return_value = _page(1, "https://n.example/1")
        self.client._odata._execute_next_link.side_effect = ServerError("down", 503)

        it = self.client.replication.iter_pages(self.query)
        next(it)
        with self.assertRaises(ServerError):
            next(it)


if __name__ == "__main__":
    unittest.main()
