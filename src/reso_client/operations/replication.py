# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Replication operations namespace."""

from __future__ import annotations

from typing import Iterator, Optional, TYPE_CHECKING

from ..models.replication import ReplicationQuery, ReplicationQueryBuilder, ReplicationResponse

if TYPE_CHECKING:
    from ..client import ResoClient


class ReplicationOperations:
    """
    Bulk transfer through the replication endpoint.

    Accessed via ``client.replication``. A walk starts with :meth:`execute` and
    continues with :meth:`execute_next_link` while the current page
    :meth:`~reso_client.models.replication.ReplicationResponse.has_more`.
    Pages must be fetched one at a time, in order: a next link is only valid
    relative to the page that produced it.

    Example::

        query = client.replication.builder("Property").top(2000).build()
        page = client.replication.execute(query)
        total = page.record_count
        while page.has_more():
            page = client.replication.execute_next_link(page.next_link)
            total += page.record_count
    """

    def __init__(self, client: "ResoClient") -> None:
        self._client = client

    def builder(self, resource: str) -> ReplicationQueryBuilder:
        """Start a :class:`ReplicationQueryBuilder` for ``resource``."""
        return ReplicationQueryBuilder(resource)

    def execute(self, query: ReplicationQuery) -> ReplicationResponse:
        """
        Fetch the first page of a replication walk.

        :param query: Built replication query.
        :type query: ReplicationQuery
        :return: First page with its next link, if any.
        :rtype: ReplicationResponse
        """
        return self._client._get_odata()._execute_replication(query)

    def execute_next_link(self, next_link: str) -> ReplicationResponse:
        """
        Fetch the page addressed by a previous page's next link.

        The link is requested verbatim with the client's credentials. Fetching
        the same link again is safe, so a failed page can be retried by the caller.

        :param next_link: ``ReplicationResponse.next_link`` of the previous page.
        :type next_link: str
        :rtype: ReplicationResponse
        """
        return self._client._get_odata()._execute_next_link(next_link)

    def iter_pages(
        self,
        query: ReplicationQuery,
        *,
        max_pages: Optional[int] = None,
    ) -> Iterator[ReplicationResponse]:
        """
        Walk a replication cursor, yielding each page in order.

        :param query: Built replication query for the first page.
        :type query: ReplicationQuery
        :param max_pages: Stop after this many pages (``None`` for all).
        :type max_pages: int or None
        :return: Generator of pages; errors propagate from the failing fetch.
        :rtype: Iterator[ReplicationResponse]

        Example::

            for page in client.replication.iter_pages(query, max_pages=5):
                load(page.records)
        """
        if max_pages is not None and max_pages < 1:
            return
        od = self._client._get_odata()
        page = od._execute_replication(query)
        fetched = 1
        yield page
        while page.next_link is not None:
            if max_pages is not None and fetched >= max_pages:
                return
            page = od._execute_next_link(page.next_link)
            fetched += 1
            yield page


__all__ = ["ReplicationOperations"]
