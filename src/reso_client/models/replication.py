# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Replication endpoint queries and cursor pages.

The replication endpoint (``{resource}/replication``) is built for bulk
transfer: pages of up to 2000 records, ordered oldest to newest, and no offset
pagination. Instead, each response carries an opaque next link in its headers
that addresses the following page.

Example:
    Walk every page of active listings::

        query = (ReplicationQueryBuilder("Property")
                 .filter("StandardStatus eq 'Active'")
                 .select("ListingKey", "ListPrice")
                 .top(2000)
                 .build())

        page = client.replication.execute(query)
        records = list(page.records)
        while page.has_more():
            page = client.replication.execute_next_link(page.next_link)
            records.extend(page.records)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Tuple, Union

from ..core._error_codes import QUERY_EMPTY_RESOURCE, QUERY_REPLICATION_TOP_EXCEEDED
from ..core.errors import InvalidQueryError
from ._serializer import serialize_replication_query
from .query_builder import FieldList, _as_field_list, _check_fields, _check_non_negative

MAX_REPLICATION_TOP = 2000


@dataclass(frozen=True)
class ReplicationQuery:
    """
    Immutable replication request: ``$filter``, ``$select`` and ``$top`` only.

    :param resource: Entity set name.
    :type resource: str
    :param filter: Opaque OData ``$filter`` expression.
    :type filter: str or None
    :param select: Field names for ``$select``, in caller order.
    :type select: tuple[str, ...] or None
    :param top: Page size, at most :data:`MAX_REPLICATION_TOP`.
    :type top: int or None
    """

    resource: str
    filter: Optional[str] = None
    select: Optional[FieldList] = None
    top: Optional[int] = None

    def to_odata_string(self) -> str:
        """
        Serialize to ``{resource}/replication`` plus parameters.

        :rtype: str
        """
        return serialize_replication_query(self)


@dataclass
class ReplicationQueryBuilder:
    """
    Fluent builder for :class:`ReplicationQuery`.

    :param resource: Entity set to replicate, e.g. ``"Property"``.
    :type resource: str

    Example::

        query = ReplicationQueryBuilder("Property").top(2000).build()
        query.to_odata_string()  # "Property/replication?$top=2000"
    """

    resource: str
    _filter: Optional[str] = None
    _select: Optional[FieldList] = None
    _top: Optional[int] = None

    @classmethod
    def new(cls, resource: str) -> "ReplicationQueryBuilder":
        return cls(resource)

    def filter(self, expression: str) -> "ReplicationQueryBuilder":
        """Set the ``$filter`` expression (passed through, percent-encoded)."""
        self._filter = expression
        return self

    def select(self, *fields: Union[str, Iterable[str]]) -> "ReplicationQueryBuilder":
        """Set the ``$select`` field list (replaces any earlier list)."""
        self._select = _as_field_list(fields)
        return self

    def top(self, n: int) -> "ReplicationQueryBuilder":
        """
        Set the page size. Values above 2000 are rejected by :meth:`build`.

        :raises ValueError: If ``n`` is not a non-negative integer.
        """
        self._top = _check_non_negative("top", n)
        return self

    def build(self) -> ReplicationQuery:
        """
        Validate and freeze the replication query.

        :rtype: ReplicationQuery
        :raises InvalidQueryError: If the resource is empty, ``top`` exceeds 2000, or a
            ``$select`` entry is not a string.
        """
        if not self.resource:
            raise InvalidQueryError("Resource name cannot be empty", subcode=QUERY_EMPTY_RESOURCE)
        _check_fields(self.resource, "$select", self._select)
        if self._top is not None and self._top > MAX_REPLICATION_TOP:
            raise InvalidQueryError(
                f"Replication $top cannot exceed {MAX_REPLICATION_TOP} (got {self._top})",
                subcode=QUERY_REPLICATION_TOP_EXCEEDED,
                details={"top": self._top, "max_top": MAX_REPLICATION_TOP},
            )
        return ReplicationQuery(
            resource=self.resource,
            filter=self._filter,
            select=self._select,
            top=self._top,
        )


@dataclass(frozen=True)
class ReplicationResponse:
    """
    One page of a replication walk.

    :param records: Records of this page, in server order. Stored as a tuple.
    :type records: tuple
    :param next_link: Absolute URL of the next page, taken from the response
        headers. ``None`` on the last page.
    :type next_link: str or None

    ``record_count`` is computed from ``records`` at construction.

    Example::

        page = ReplicationResponse([{"ListingKey": "12345"}], None)
        page.record_count  # 1
        page.has_more()    # False
    """

    records: Tuple[Any, ...]
    next_link: Optional[str] = None
    record_count: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "records", tuple(self.records))
        object.__setattr__(self, "record_count", len(self.records))

    def has_more(self) -> bool:
        """True when another page can be fetched with :attr:`next_link`."""
        return self.next_link is not None

    def get_next_link(self) -> Optional[str]:
        """Return the next-page URL, or ``None`` when this is the last page."""
        return self.next_link


__all__ = [
    "MAX_REPLICATION_TOP",
    "ReplicationQuery",
    "ReplicationQueryBuilder",
    "ReplicationResponse",
]
