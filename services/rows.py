"""
Row values the JSON encoder cannot take as-is.

Binary columns (BINARY, VARBINARY, BLOB and CHAR FOR BIT DATA / CCSID 65535
fields, common on IBM i) arrive from the driver as ``bytes``.  They are sent
as upper-case hex, the way IBM i tools display them.
"""


def json_value(value):
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex().upper()
    return value


def json_row(row: dict) -> dict:
    return {name: json_value(value) for name, value in row.items()}


def json_rows(rows: list[dict]) -> list[dict]:
    return [json_row(row) for row in rows]
