# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Utilities for the RESO client.

This module contains helper functions such as the pandas conversion helpers.
"""

__all__ = []
