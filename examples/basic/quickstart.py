#!/usr/bin/env python3
# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
RESO Web API client - Quickstart

Runs a handful of read-only requests against a RESO server:
- metadata summary
- filtered, sorted page of listings with an embedded count
- count-only query
- single record by key

Prerequisites:
- ``pip install -e ".[examples]"``
- A ``.env`` file (or environment) with RESO_BASE_URL and RESO_TOKEN,
  optionally RESO_DATASET_ID and RESO_TIMEOUT

Usage:
    python examples/basic/quickstart.py
"""

import logging
import sys

from dotenv import load_dotenv

from reso_client import QueryBuilder, ResoClient, ResoError


def main() -> int:
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    try:
        client = ResoClient.from_env()
    except ResoError as e:
        print(f"Configuration problem: {e}")
        return 1

    with client:
        try:
            schema = client.metadata.schema()
            print(schema.summary())
            print("RESO resources:", ", ".join(schema.find_reso_resources()))

            query = (
                QueryBuilder("Property")
                .filter("City eq 'Austin' and ListPrice gt 500000")
                .select("ListingKey", "City", "ListPrice")
                .order_by("ListPrice", "desc")
                .top(10)
                .with_count()
                .build()
            )
            result = client.query.execute(query)
            print(f"\n{result.get('@odata.count')} matching listings, first {len(result['value'])}:")
            for record in result["value"]:
                print(f"  {record['ListingKey']}: {record['City']} ${record['ListPrice']:,}")

            total = client.query.count(QueryBuilder("Property").filter("City eq 'Austin'").count().build())
            print(f"\nAustin listings: {total}")

            if result["value"]:
                key = result["value"][0]["ListingKey"]
                listing = client.query.get_by_key(
                    QueryBuilder.by_key("Property", key).select("ListingKey", "City").build()
                )
                print(f"\nBy key: {listing}")
        except ResoError as e:
            print(f"Request failed [{e.code}/{e.subcode}]: {e.message}")
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
