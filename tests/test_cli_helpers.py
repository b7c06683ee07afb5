"""Text layout helpers and JSON conversion used by the output modes."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from tsformat.cli.format_helpers import kv_block, tabular
from tsformat.lib.engine.manip import Need
from tsformat.lib.errors import ErrorCode
from tsformat.lib.serialization import to_jsonable
from tsformat.lib.special import Special


def test_tabular_pads_columns_and_ragged_rows() -> None:
    assert tabular([["a", "bb", "c"], ["ddd"]]) == "a    bb  c\nddd"
    assert tabular([]) == ""


def test_kv_block_drops_missing_values() -> None:
    assert kv_block([("error", "boom"), ("offset", None), ("hint", "")]) == "error: boom\nhint: "


@dataclass(frozen=True, slots=True)
class _Sample:
    code: ErrorCode
    needs: Need
    special: Special
    where: Path
    pairs: tuple[tuple[int, str], ...]


def test_to_jsonable_handles_enums_flags_and_nesting() -> None:
    sample = _Sample(
        code=ErrorCode.NUMBER_OVERFLOW,
        needs=Need.WIDTH | Need.ARG,
        special=Special.NEWLINE | Special.FLUSH,
        where=Path("a/b"),
        pairs=((1, "x"),),
    )

    assert to_jsonable(sample) == {
        "code": "number_overflow",
        "needs": ["width", "arg"],
        "special": ["newline", "flush"],
        "where": "a/b",
        "pairs": [[1, "x"]],
    }
