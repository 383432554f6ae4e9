"""Mixed-radix indexing of plural form tables."""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence, Tuple

from .errors import OutOfRangeCombination
from .numbers import NumberSystem


def numeric_count(is_numeric: Sequence[bool]) -> int:
    """Count the numeric placeholders in a placeholder pattern."""

    return sum(1 for flag in is_numeric if flag)


class PluralCombinationIndexer:
    """Converts between a row of a plural form table and its category tuple.

    The row number is read as a mixed-radix number in base
    ``number_system.category_count``. Digit ``k`` (least significant first)
    is the plural category of the ``k``-th numeric placeholder, counted left
    to right. With no numeric placeholders the table has a single row.
    """

    def __init__(self, number_system: NumberSystem, numeric_placeholders: int) -> None:
        if numeric_placeholders < 0:
            raise ValueError("numeric_placeholders must not be negative.")
        self.number_system = number_system
        self.numeric_placeholders = numeric_placeholders
        self.radix = number_system.category_count
        self.row_count = self.radix ** numeric_placeholders

    def digits(self, row: int) -> Tuple[int, ...]:
        if not 0 <= row < self.row_count:
            raise OutOfRangeCombination(
                f"Row {row} is outside the form table (0..{self.row_count - 1})."
            )
        result = []
        for _ in range(self.numeric_placeholders):
            result.append(row % self.radix)
            row //= self.radix
        return tuple(result)

    def row_of(self, digits: Sequence[int]) -> int:
        if len(digits) != self.numeric_placeholders:
            raise OutOfRangeCombination(
                f"Expected {self.numeric_placeholders} plural categories, got {len(digits)}."
            )
        row = 0
        for position, digit in enumerate(digits):
            if not 0 <= digit < self.radix:
                raise OutOfRangeCombination(
                    f"Category {digit} for numeric placeholder #{position} is outside "
                    f"0..{self.radix - 1}."
                )
            row += digit * self.radix ** position
        return row

    def row_for_quantities(self, quantities: Iterable) -> int:
        """Return the row holding the form for the given quantities."""

        return self.row_of([self.number_system.category_of(q) for q in quantities])

    def labels(self, row: int) -> Tuple[str, ...]:
        return tuple(self.number_system.label(digit) for digit in self.digits(row))

    def rows(self) -> Iterator[Tuple[int, Tuple[int, ...]]]:
        for row in range(self.row_count):
            yield row, self.digits(row)


def format_plural(
    forms: Sequence[str],
    is_numeric: Sequence[bool],
    number_system: NumberSystem,
    *args,
) -> str:
    """Select the form matching the numeric arguments and format it.

    ``args`` supplies one value per placeholder; the values at numeric
    positions choose the row, then the chosen form is filled in with
    :meth:`str.format`.
    """

    if len(args) != len(is_numeric):
        raise ValueError(
            f"Expected {len(is_numeric)} arguments, got {len(args)}."
        )
    indexer = PluralCombinationIndexer(number_system, numeric_count(is_numeric))
    quantities = [value for value, flag in zip(args, is_numeric) if flag]
    row = indexer.row_for_quantities(quantities)
    form = forms[row] if row < len(forms) else ""
    return form.format(*args)
