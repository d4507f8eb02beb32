# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Query operations namespace."""

from __future__ import annotations

from typing import Any, Dict, TYPE_CHECKING

from ..models.query_builder import Query, QueryBuilder

if TYPE_CHECKING:
    import pandas as pd

    from ..client import ResoClient


class QueryOperations:
    """
    Query operations for retrieving records.

    Accessed via ``client.query``. Queries are built with
    :class:`~reso_client.models.query_builder.QueryBuilder` (or :meth:`builder`)
    and executed here.

    Example:
        Records with an embedded total::

            query = (client.query.builder("Property")
                     .filter("City eq 'Austin'")
                     .with_count()
                     .top(10)
                     .build())
            result = client.query.execute(query)
            print(result["@odata.count"], len(result["value"]))

        Count only::

            total = client.query.count(
                client.query.builder("Property").filter("City eq 'Austin'").count().build()
            )

        Single record by key::

            record = client.query.get_by_key(
                QueryBuilder.by_key("Property", "12345").select("ListingKey", "City").build()
            )
    """

    def __init__(self, client: "ResoClient") -> None:
        """
        Initialize QueryOperations.

        :param client: Parent ResoClient instance.
        :type client: ResoClient
        """
        self._client = client

    def builder(self, resource: str) -> QueryBuilder:
        """
        Start a :class:`QueryBuilder` for ``resource``.

        :param resource: Entity set name, e.g. ``"Property"``.
        :type resource: str
        :rtype: QueryBuilder
        """
        return QueryBuilder(resource)

    def execute(self, query: Query) -> Dict[str, Any]:
        """
        Execute a query and return the raw OData JSON envelope.

        Records are under ``"value"``; ``"@odata.count"`` is present when the
        query used :meth:`QueryBuilder.with_count`.

        :param query: Built query.
        :type query: Query
        :return: Decoded JSON response.
        :rtype: dict

        :raises ~reso_client.core.errors.HttpError: If the Web API returns an error status.
        :raises ~reso_client.core.errors.NetworkError: If the request could not be sent.
        :raises ~reso_client.core.errors.ParseError: If the body is not valid JSON.
        """
        return self._client._get_odata()._execute(query)

    def get_by_key(self, query: Query) -> Dict[str, Any]:
        """
        Execute a key access query and return the single entity.

        :param query: Query built with :meth:`QueryBuilder.by_key`.
        :type query: Query
        :return: The entity as a dict (no ``value`` envelope).
        :rtype: dict
        """
        return self._client._get_odata()._execute_by_key(query)

    def count(self, query: Query) -> int:
        """
        Execute a count-only query (``{resource}/$count``).

        :param query: Query built with :meth:`QueryBuilder.count`.
        :type query: Query
        :return: Number of matching records.
        :rtype: int
        :raises ~reso_client.core.errors.ParseError: If the body is not an integer.
        """
        return self._client._get_odata()._execute_count(query)

    def to_dataframe(self, query: Query) -> "pd.DataFrame":
        """
        Execute a query and return its records as a pandas DataFrame.

        OData annotation keys are dropped. When the query has ``$select``, the
        columns follow that order.

        :param query: Built query.
        :type query: Query
        :rtype: pandas.DataFrame
        """
        from ..utils._pandas import records_to_dataframe

        data = self._client._get_odata()._execute(query)
        records = data.get("value", []) if isinstance(data, dict) else []
        return records_to_dataframe(records, columns=query.select)


__all__ = ["QueryOperations"]
