from __future__ import annotations


def _clean(value: str) -> str:
    return value.strip().replace('"', "")


def parse_csv_records(text: str) -> list[dict[str, str]]:
    """Parse GTFS-style comma separated text into one dict per data row.

    The split is purely positional on ',' (quoted commas are not supported).
    Every '"' is removed from values. Rows shorter than the header are padded
    with '', longer rows have their extra fields dropped.
    """

    text = text.lstrip("\ufeff").strip()
    if not text:
        return []

    lines = text.split("\n")
    headers = [h.strip() for h in lines[0].split(",")]

    records: list[dict[str, str]] = []
    for line in lines[1:]:
        values = [_clean(v) for v in line.split(",")]
        records.append(
            {
                header: values[i] if i < len(values) else ""
                for i, header in enumerate(headers)
            }
        )
    return records
