# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures and configuration for RESO client tests.

This module provides common test fixtures, mock objects, and configuration
that can be used across all test modules.
"""

import pytest

from reso_client.core._auth import StaticTokenCredential
from reso_client.core.config import ResoConfig


@pytest.fixture
def sample_base_url():
    """Standard test service root."""
    return "https://api.mls.example/odata"


@pytest.fixture
def static_credential():
    """Credential that always returns ``test-token``."""
    return StaticTokenCredential("test-token")


@pytest.fixture
def test_config():
    """Configuration without dataset id and a short timeout."""
    return ResoConfig(dataset_id=None, http_timeout=5)


@pytest.fixture(autouse=True)
def clean_reso_env(monkeypatch):
    """Keep host RESO_* variables from leaking into tests."""
    for name in ("RESO_BASE_URL", "RESO_TOKEN", "RESO_DATASET_ID", "RESO_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


SAMPLE_METADATA_XML = """<?xml version="1.0" encoding="utf-8"?>
<edmx:Edmx Version="4.0" xmlns:edmx="http://docs.oasis-open.org/odata/ns/edmx">
  <edmx:DataServices>
    <Schema Namespace="org.reso.metadata" xmlns="http://docs.oasis-open.org/odata/ns/edm">
      <EntityType Name="Property">
        <Key><PropertyRef Name="ListingKey"/></Key>
        <Property Name="ListingKey" Type="Edm.String" Nullable="false" MaxLength="255"/>
        <Property Name="ListPrice" Type="Edm.Decimal"/>
        <Property Name="City" Type="Edm.String" MaxLength="max"/>
        <Property Name="Appliances" Type="Collection(PropertyEnums.Appliances)"/>
        <NavigationProperty Name="ListOffice" Type="org.reso.metadata.Office"/>
      </EntityType>
      <EntityType Name="Member">
        <Property Name="MemberKey" Type="Edm.String" Nullable="false"/>
      </EntityType>
      <EntityType Name="CustomThing">
        <Property Name="Id" Type="Edm.Int32"/>
      </EntityType>
    </Schema>
    <Schema Namespace="org.reso.metadata.enums" xmlns="http://docs.oasis-open.org/odata/ns/edm"/>
  </edmx:DataServices>
</edmx:Edmx>
"""


@pytest.fixture
def sample_metadata_xml():
    """Small EDMX document with three entity types."""
    return SAMPLE_METADATA_XML
