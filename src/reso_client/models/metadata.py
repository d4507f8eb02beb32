# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Entity metadata parsed from a RESO ``$metadata`` (EDMX) document.

Only the parts needed to discover resources and their fields are modelled:
the schema namespace, entity types, and their properties.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..core._error_codes import PARSE_METADATA
from ..core.errors import ParseError

# Standard RESO resources, in the order they are reported.
COMMON_RESO_RESOURCES = (
    "Property",
    "Member",
    "Office",
    "OpenHouse",
    "Media",
    "Team",
    "Contact",
    "InternetAddress",
    "Contacts",
    "HistoryTransactional",
)


@dataclass
class EntityProperty:
    """
    A structural property of an entity type.

    :param name: Property name, e.g. ``"ListPrice"``.
    :type name: str
    :param type: EDM type name, e.g. ``"Edm.Decimal"`` or ``"Collection(Edm.String)"``.
    :type type: str
    :param nullable: False only when the document says ``Nullable="false"``.
    :type nullable: bool
    :param max_length: ``MaxLength`` facet when numeric.
    :type max_length: int or None
    """

    name: str
    type: str = ""
    nullable: bool = True
    max_length: Optional[int] = None

    @property
    def is_collection(self) -> bool:
        return self.type.startswith("Collection(")


@dataclass
class EntityType:
    """An entity type and its properties, in document order."""

    name: str
    properties: List[EntityProperty] = field(default_factory=list)

    def property_names(self) -> List[str]:
        return [p.name for p in self.properties]

    def get_property(self, name: str) -> Optional[EntityProperty]:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None


@dataclass
class Schema:
    """
    Parsed ``$metadata`` schema.

    :param namespace: ``Namespace`` attribute of the first ``Schema`` element.
    :type namespace: str
    :param entities: Entity types keyed by name.
    :type entities: dict[str, EntityType]
    """

    namespace: str = ""
    entities: Dict[str, EntityType] = field(default_factory=dict)

    def find_reso_resources(self) -> List[str]:
        """Return the standard RESO resources present in this schema."""
        return [name for name in COMMON_RESO_RESOURCES if name in self.entities]

    def summary(self) -> str:
        """Printable overview: namespace, entity count, one line per entity."""
        lines = [f"RESO Schema: {self.namespace}", f"Total entities: {len(self.entities)}", ""]
        for name in sorted(self.entities):
            lines.append(f"{name} ({len(self.entities[name].properties)} properties)")
        return "\n".join(lines)


def _local_name(tag: str) -> str:
    """Strip the ``{namespace}`` prefix from an element tag."""
    return tag.rsplit("}", 1)[-1]


def _parse_property(elem: ET.Element) -> EntityProperty:
    max_length: Optional[int] = None
    raw_max = elem.get("MaxLength")
    if raw_max is not None:
        try:
            max_length = int(raw_max)
        except ValueError:
            max_length = None
    return EntityProperty(
        name=elem.get("Name", ""),
        type=elem.get("Type", ""),
        nullable=elem.get("Nullable") != "false",
        max_length=max_length,
    )


def parse_metadata(xml_text: str) -> Schema:
    """
    Parse an EDMX ``$metadata`` document.

    Element namespaces are ignored, so EDMX 4.0 and vendor variants parse alike.

    :param xml_text: Raw XML returned by the ``$metadata`` endpoint.
    :type xml_text: str
    :return: Parsed schema.
    :rtype: Schema
    :raises ParseError: If the document is not well-formed XML.

    Example::

        schema = parse_metadata(client.metadata.fetch())
        print(schema.find_reso_resources())  # ['Property', 'Member', ...]
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as exc:
        raise ParseError(f"XML parse error: {exc}", subcode=PARSE_METADATA) from exc

    schema = Schema()
    for elem in root.iter():
        local = _local_name(elem.tag)
        if local == "Schema" and not schema.namespace:
            schema.namespace = elem.get("Namespace", "")
        elif local == "EntityType":
            entity = EntityType(name=elem.get("Name", ""))
            for child in elem:
                if _local_name(child.tag) == "Property":
                    entity.properties.append(_parse_property(child))
            schema.entities[entity.name] = entity
    return schema


__all__ = ["EntityProperty", "EntityType", "Schema", "parse_metadata", "COMMON_RESO_RESOURCES"]
