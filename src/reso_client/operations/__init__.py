# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Operation namespace classes for the RESO client.

This module contains the operation namespace classes that organize
related operations under intuitive namespaces:
- QueryOperations: record, key access and count queries
- ReplicationOperations: bulk replication walks
- MetadataOperations: ``$metadata`` retrieval and parsing
"""

__all__ = []
