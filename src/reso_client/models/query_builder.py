# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Fluent query builder for constructing RESO/OData queries.

:class:`QueryBuilder` accumulates request parameters and validates them once, in
:meth:`QueryBuilder.build`, producing an immutable :class:`Query` whose only
further operation is :meth:`Query.to_odata_string`.
"""

from __future__ import annotations

from collections import abc
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple, Union

from ..core._error_codes import QUERY_EMPTY_RESOURCE, QUERY_INVALID_FIELD, QUERY_KEY_CONFLICT
from ..core.errors import InvalidQueryError
from ._serializer import serialize_query

FieldList = Tuple[str, ...]

# $top and $skip are unsigned 32-bit on the wire.
MAX_UINT32 = 2**32 - 1


def _as_field_list(fields: Tuple[Union[str, Iterable[str]], ...]) -> Tuple[Any, ...]:
    """Accept ``select("A", "B")`` as well as ``select(["A", "B"])`` or any single iterable."""
    if len(fields) == 1 and isinstance(fields[0], abc.Iterable) and not isinstance(fields[0], (str, bytes)):
        return tuple(fields[0])
    return tuple(fields)


def _check_non_negative(name: str, n: int) -> int:
    if isinstance(n, bool) or not isinstance(n, int) or not 0 <= n <= MAX_UINT32:
        raise ValueError(f"{name} must be a non-negative integer")
    return n


def _check_fields(resource: str, param: str, fields: Optional[Tuple[Any, ...]]) -> None:
    """Raise :class:`InvalidQueryError` unless every field name is a string."""
    if fields is None:
        return
    for f in fields:
        if not isinstance(f, str):
            raise InvalidQueryError(
                f"{param} field names must be strings (got {type(f).__name__})",
                subcode=QUERY_INVALID_FIELD,
                details={"resource": resource, "parameter": param},
            )


@dataclass(frozen=True)
class Query:
    """
    Immutable description of one RESO/OData request.

    Instances are produced by :meth:`QueryBuilder.build`; constructing one
    directly skips validation.

    :param resource: Entity set name, e.g. ``"Property"``.
    :type resource: str
    :param key: Entity key for direct (singleton) access.
    :type key: str or None
    :param filter: Opaque OData ``$filter`` expression.
    :type filter: str or None
    :param select: Field names for ``$select``, in caller order.
    :type select: tuple[str, ...] or None
    :param expand: Navigation properties for ``$expand``, in caller order.
    :type expand: tuple[str, ...] or None
    :param order_by: Combined ``"field direction"`` for ``$orderby``.
    :type order_by: str or None
    :param top: ``$top`` value.
    :type top: int or None
    :param skip: ``$skip`` value.
    :type skip: int or None
    :param count: Embed ``@odata.count`` alongside records (``$count=true``).
    :type count: bool
    :param count_only: Request ``{resource}/$count`` instead of records.
    :type count_only: bool
    :param apply: Opaque ``$apply`` aggregation expression.
    :type apply: str or None
    """

    resource: str
    key: Optional[str] = None
    filter: Optional[str] = None
    select: Optional[FieldList] = None
    expand: Optional[FieldList] = None
    order_by: Optional[str] = None
    top: Optional[int] = None
    skip: Optional[int] = None
    count: bool = False
    count_only: bool = False
    apply: Optional[str] = None

    @property
    def is_key_access(self) -> bool:
        """True when the query addresses a single entity by key."""
        return self.key is not None

    def to_odata_string(self) -> str:
        """
        Serialize to the path+query string relative to the service root.

        :return: e.g. ``"Property?$filter=City%20eq%20%27Austin%27&$top=10"``.
        :rtype: str
        """
        return serialize_query(self)


@dataclass
class QueryBuilder:
    """
    Fluent interface for building RESO/OData queries.

    Each setter records exactly one parameter and returns the builder for
    chaining. Calling the same setter twice keeps the last value.

    :param resource: Entity set to query, e.g. ``"Property"`` or ``"Member"``.
    :type resource: str

    Example:
        Filtered, sorted page of listings::

            query = (QueryBuilder("Property")
                     .filter("City eq 'Austin' and ListPrice gt 500000")
                     .select("ListingKey", "City", "ListPrice")
                     .order_by("ListPrice", "desc")
                     .top(10)
                     .build())
            query.to_odata_string()
            # "Property?$filter=...&$select=ListingKey,City,ListPrice&$orderby=ListPrice%20desc&$top=10"

        Single listing by key::

            query = (QueryBuilder.by_key("Property", "12345")
                     .expand("ListOffice", "ListAgent")
                     .build())
            query.to_odata_string()
            # "Property('12345')?$expand=ListOffice,ListAgent"
    """

    resource: str
    _key: Optional[str] = None
    _filter: Optional[str] = None
    _select: Optional[FieldList] = None
    _expand: Optional[FieldList] = None
    _order_by: Optional[str] = None
    _top: Optional[int] = None
    _skip: Optional[int] = None
    _count: bool = False
    _count_only: bool = False
    _apply: Optional[str] = None

    @classmethod
    def new(cls, resource: str) -> "QueryBuilder":
        """Start a standard collection query."""
        return cls(resource)

    @classmethod
    def by_key(cls, resource: str, key: str) -> "QueryBuilder":
        """
        Start a direct key access query, e.g. ``Property('12345')``.

        Key access returns a single entity. Only :meth:`select` and
        :meth:`expand` may be combined with it; anything else fails
        :meth:`build`.

        :param resource: Entity set name.
        :type resource: str
        :param key: Entity key value (percent-encoded on serialization).
        :type key: str
        :return: New builder.
        :rtype: QueryBuilder
        """
        return cls(resource, _key=key)

    def filter(self, expression: str) -> "QueryBuilder":
        """
        Set the ``$filter`` expression.

        The expression is not parsed or validated; it is percent-encoded as-is.

        Example::

            QueryBuilder("Property").filter("Appliances has PropertyEnums.Appliances'Dishwasher'")
        """
        self._filter = expression
        return self

    def apply(self, expression: str) -> "QueryBuilder":
        """
        Set the ``$apply`` aggregation expression.

        Example::

            QueryBuilder("Property").apply("groupby((City), aggregate($count as Count))")
        """
        self._apply = expression
        return self

    def order_by(self, field: str, direction: str) -> "QueryBuilder":
        """
        Set ``$orderby`` to ``"{field} {direction}"``.

        ``direction`` is passed through untouched (``"asc"``/``"desc"`` are what
        servers accept).
        """
        self._order_by = f"{field} {direction}"
        return self

    def select(self, *fields: Union[str, Iterable[str]]) -> "QueryBuilder":
        """
        Set the ``$select`` field list (replaces any earlier list).

        :param fields: Field names, or a single list of field names.
        :return: Self for method chaining.
        :rtype: QueryBuilder
        """
        self._select = _as_field_list(fields)
        return self

    def expand(self, *fields: Union[str, Iterable[str]]) -> "QueryBuilder":
        """Set the ``$expand`` navigation property list (replaces any earlier list)."""
        self._expand = _as_field_list(fields)
        return self

    def top(self, n: int) -> "QueryBuilder":
        """
        Limit the number of returned records.

        :raises ValueError: If ``n`` is not an integer in ``0..2**32-1``.
        """
        self._top = _check_non_negative("top", n)
        return self

    def skip(self, n: int) -> "QueryBuilder":
        """
        Skip the first ``n`` records (offset pagination).

        :raises ValueError: If ``n`` is not an integer in ``0..2**32-1``.
        """
        self._skip = _check_non_negative("skip", n)
        return self

    def with_count(self) -> "QueryBuilder":
        """Include the total match count in the response (``$count=true``)."""
        self._count = True
        return self

    def count(self) -> "QueryBuilder":
        """Turn the query into a count-only request (``{resource}/$count``)."""
        self._count_only = True
        return self

    def _key_conflict(self) -> Optional[str]:
        if self._filter is not None:
            return "$filter"
        if self._top is not None:
            return "$top"
        if self._skip is not None:
            return "$skip"
        if self._order_by is not None:
            return "$orderby"
        if self._apply is not None:
            return "$apply"
        if self._count or self._count_only:
            return "$count"
        return None

    def build(self) -> Query:
        """
        Validate and freeze the accumulated parameters.

        :return: Immutable query.
        :rtype: Query
        :raises InvalidQueryError: If the resource is empty, or if key access is
            combined with ``$filter``, ``$top``, ``$skip``, ``$orderby``,
            ``$apply`` or ``$count``. Also raised when a ``$select`` or ``$expand`` entry
            is not a string.
        """
        if not self.resource:
            raise InvalidQueryError("Resource name cannot be empty", subcode=QUERY_EMPTY_RESOURCE)
        _check_fields(self.resource, "$select", self._select)
        _check_fields(self.resource, "$expand", self._expand)
        if self._key is not None:
            conflict = self._key_conflict()
            if conflict is not None:
                raise InvalidQueryError(
                    f"Key access cannot be used with {conflict}",
                    subcode=QUERY_KEY_CONFLICT,
                    details={"resource": self.resource, "parameter": conflict},
                )
        return Query(
            resource=self.resource,
            key=self._key,
            filter=self._filter,
            select=self._select,
            expand=self._expand,
            order_by=self._order_by,
            top=self._top,
            skip=self._skip,
            count=self._count,
            count_only=self._count_only,
            apply=self._apply,
        )


__all__ = ["Query", "QueryBuilder"]
