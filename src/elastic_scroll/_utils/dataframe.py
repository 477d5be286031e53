"""DataFrame conversion utilities."""

from typing import Iterable, Optional

import pandas as pd


def hits_to_dataframe(
    hits: Iterable[dict],
    timestamp_field: Optional[str] = "@timestamp",
) -> pd.DataFrame:
    """
    Convert search hits to a pandas DataFrame, one row per document.

    Each row holds the hit's _source fields plus an _id column.

    Args:
        hits: Iterable of hit dicts (e.g., from ScrollSession.drain_all)
        timestamp_field: Column to parse as UTC datetimes, None to skip

    Returns:
        pandas DataFrame with all documents

    Example:
        hits = [{"_id": "a1", "_source": {"@timestamp": "2024-01-01T00:00:00Z"}}]
        df = hits_to_dataframe(hits)
        print(df.dtypes)  # @timestamp is datetime64[ns, UTC]
    """
    rows = [{"_id": hit.get("_id"), **(hit.get("_source") or {})} for hit in hits]
    df = pd.DataFrame(rows)

    if df.empty:
        return df

    if timestamp_field and timestamp_field in df.columns:
        df[timestamp_field] = pd.to_datetime(df[timestamp_field], utc=True)

    return df
