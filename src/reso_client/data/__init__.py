# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data access layer for the RESO client.

This module contains OData request execution, error mapping, and replication
page decoding.
"""

__all__ = []
