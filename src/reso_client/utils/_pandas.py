# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Internal pandas helpers"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence

import pandas as pd


def strip_odata_keys(record: Dict[str, Any]) -> Dict[str, Any]:
    """Remove OData annotation keys (keys containing '@') from a record dict."""
    return {k: v for k, v in record.items() if "@" not in k}


def records_to_dataframe(
    records: Iterable[Dict[str, Any]],
    strip_odata: bool = True,
    columns: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """Build a DataFrame from record dicts, one row per record.

    :param records: Records as returned in an OData ``value`` array.
    :param strip_odata: When True (default), annotation keys such as ``@odata.etag`` are dropped.
    :param columns: Optional column order, e.g. the ``$select`` list of the query.
    """
    rows: List[Dict[str, Any]] = [
        strip_odata_keys(r) if strip_odata else dict(r) for r in records if isinstance(r, dict)
    ]
    return pd.DataFrame(rows, columns=list(columns) if columns is not None else None)
