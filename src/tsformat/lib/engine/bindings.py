"""Per-slot binding table built from allocated references."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from tsformat.lib.engine.allocate import Allocation
from tsformat.lib.engine.manip import Manip, Need


@dataclass(slots=True, eq=False)
class Binding:
    """Everything one argument supplies to one directive."""

    kinds: Need
    manip_index: int
    manip: Manip


@dataclass(slots=True)
class BindingTable:
    argument_count: int
    slots: dict[int, list[Binding]] = field(default_factory=dict)

    def bindings_for(self, index: int) -> list[Binding]:
        return self.slots.get(index, [])

    def __iter__(self) -> Iterator[tuple[int, list[Binding]]]:
        return iter(sorted(self.slots.items()))

    def __len__(self) -> int:
        return len(self.slots)

    @classmethod
    def build(cls, allocation: Allocation, manips: list[Manip]) -> BindingTable:
        """Group references by slot, OR-ing kinds for repeated (slot, directive) pairs."""

        table = cls(argument_count=allocation.argument_count)
        for ref in allocation.references:
            assert ref.argnum is not None
            bound = table.slots.setdefault(ref.argnum, [])
            for binding in bound:
                if binding.manip_index == ref.manip_index:
                    binding.kinds |= ref.kinds
                    break
            else:
                bound.append(Binding(ref.kinds, ref.manip_index, manips[ref.manip_index]))
        return table
