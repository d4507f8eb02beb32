#!/usr/bin/env python3
# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
RESO Web API client - Replication walk

Pulls a resource through the replication endpoint in pages of up to 2000
records, following the next link returned in each response's headers, and
loads everything into a pandas DataFrame.

Usage:
    python examples/advanced/replication_walk.py [Resource] [max_pages]
"""

import logging
import sys

import pandas as pd
from dotenv import load_dotenv

from reso_client import MAX_REPLICATION_TOP, ReplicationQueryBuilder, ResoClient, ResoError
from reso_client.utils._pandas import records_to_dataframe


def main(argv) -> int:
    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    resource = argv[1] if len(argv) > 1 else "Property"
    max_pages = int(argv[2]) if len(argv) > 2 else 5

    query = (
        ReplicationQueryBuilder(resource)
        .select("ListingKey", "ModificationTimestamp", "StandardStatus")
        .top(MAX_REPLICATION_TOP)
        .build()
    )

    frames = []
    with ResoClient.from_env() as client:
        try:
            for i, page in enumerate(client.replication.iter_pages(query, max_pages=max_pages), start=1):
                print(f"Page {i}: {page.record_count} records (more: {page.has_more()})")
                frames.append(records_to_dataframe(page.records))
        except ResoError as e:
            print(f"Replication stopped [{e.code}]: {e.message}")
            return 1

    if not frames:
        print("No records.")
        return 0
    df = pd.concat(frames, ignore_index=True)
    print(df.head())
    print(f"Total: {len(df)} rows")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
