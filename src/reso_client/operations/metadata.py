# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Service metadata operations namespace."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..models.metadata import Schema, parse_metadata

if TYPE_CHECKING:
    from ..client import ResoClient


class MetadataOperations:
    """
    Access to the service ``$metadata`` document.

    Accessed via ``client.metadata``.

    Example::

        schema = client.metadata.schema()
        print(schema.summary())
        listing = schema.entities["Property"]
        print(listing.property_names()[:10])
    """

    def __init__(self, client: "ResoClient") -> None:
        self._client = client

    def fetch(self) -> str:
        """
        Fetch the raw EDMX XML.

        :rtype: str
        """
        return self._client._get_odata()._fetch_metadata()

    def schema(self) -> Schema:
        """
        Fetch and parse ``$metadata``.

        :rtype: ~reso_client.models.metadata.Schema
        :raises ~reso_client.core.errors.ParseError: If the document is not well-formed XML.
        """
        return parse_metadata(self.fetch())


__all__ = ["MetadataOperations"]
