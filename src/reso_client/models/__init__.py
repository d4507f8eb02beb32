# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data models and type definitions for the RESO client.

- :class:`~reso_client.models.query_builder.QueryBuilder` / :class:`~reso_client.models.query_builder.Query`:
  standard OData queries.
- :class:`~reso_client.models.replication.ReplicationQueryBuilder` /
  :class:`~reso_client.models.replication.ReplicationQuery` /
  :class:`~reso_client.models.replication.ReplicationResponse`: bulk replication.
- :class:`~reso_client.models.metadata.Schema`: parsed ``$metadata``.

Note:
    This ``__init__.py`` does NOT import/export models. Import directly from the
    specific module files, or from the top-level :mod:`reso_client` package.
"""

__all__ = []
