"""Column and key/value layout shared by `format_text()` implementations."""

from __future__ import annotations


def tabular(rows: list[list[str]], sep: str = "  ") -> str:
    """Left-align each column to its widest cell.

    >>> tabular([["1", "%s"], ["10", "%*d"]])
    '1   %s\\n10  %*d'
    """
    if not rows:
        return ""
    col_count = max(len(row) for row in rows)
    padded = [row + [""] * (col_count - len(row)) for row in rows]
    widths = [max(len(row[col]) for row in padded) for col in range(col_count)]
    return "\n".join(
        sep.join(cell.ljust(widths[col]) for col, cell in enumerate(row)).rstrip()
        for row in padded
    )


def kv_block(pairs: list[tuple[str, str | None]]) -> str:
    """Render `key: value` lines, dropping pairs whose value is None.

    >>> kv_block([("text", "'a'"), ("offset", None)])
    "text: 'a'"
    """
    return "\n".join(f"{key}: {value}" for key, value in pairs if value is not None)
