"""
Tabular export of parsed tags.

Flattens ParsedTag records into a pandas DataFrame for inspection or for
writing out with DataFrame.to_csv / to_excel.
"""

from typing import Iterable, List

import pandas as pd

from mt940tags.parsers.models import ParsedTag, TagKind

BASE_COLUMNS = ["tag_id", "sub_id", "kind", "content"]


def tags_to_dataframe(tags: Iterable[ParsedTag]) -> pd.DataFrame:
    """
    Convert parsed tags to a DataFrame.

    One row per tag. Base columns come first, followed by one column per
    field name in order of first appearance. Fields a tag does not have are
    left empty (NaN). Message block rows also fill `is_starting`.

    Args:
        tags: Parsed tags, in message order

    Returns:
        DataFrame (empty with base columns if no tags)
    """
    rows = []
    field_columns: List[str] = []

    for tag in tags:
        row = {
            "tag_id": str(tag.tag_id),
            "sub_id": tag.sub_id or "",
            "kind": tag.kind.name,
            "content": tag.content,
        }
        if tag.kind is TagKind.MESSAGE_BLOCK:
            row["is_starting"] = tag.is_starting
            if "is_starting" not in field_columns:
                field_columns.append("is_starting")

        for name, value in tag.fields.items():
            row[name] = value
            if name not in field_columns:
                field_columns.append(name)

        rows.append(row)

    return pd.DataFrame(rows, columns=BASE_COLUMNS + field_columns)
