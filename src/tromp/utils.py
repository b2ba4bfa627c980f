from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Interval:
    """
    A closed range of grid columns, or an empty range when `values` is None.
    """

    values: Optional[tuple[int, int]]

    @staticmethod
    def span(start: int, width: int) -> "Interval":
        if width <= 0:
            return Interval(None)
        return Interval((start, start + width - 1))

    def __or__(self, other: "Interval") -> "Interval":
        if self.values is None:
            return other
        if other.values is None:
            return self
        return Interval(
            (min(self.values[0], other.values[0]), max(self.values[1], other.values[1]))
        )

    def __getitem__(self, index):
        assert self.values is not None, "interval is empty"
        return self.values[index]

    def __len__(self) -> int:
        if self.values is None:
            return 0
        return self.values[1] - self.values[0] + 1

