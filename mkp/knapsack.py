"""
Problem model for the multidimensional knapsack problem (MKP).

Holds the immutable item/capacity description of one instance and the
feasibility arithmetic every chromosome is evaluated against. Chromosomes
only borrow a Knapsack; nothing here mutates a selection.
"""

from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import List, Optional, Sequence, Tuple

import numpy as np


class InstanceError(ValueError):
    """Raised when an instance violates the MKP model invariants."""
    pass


@dataclass(frozen=True)
class Item:
    """
    A selectable item.

    Attributes:
        id: Stable 1-based identifier (position in the instance + 1)
        value: Non-negative objective contribution
        weight: Non-negative consumption, one entry per capacity dimension
    """
    id: int
    value: int
    weight: Tuple[int, ...]

    def __post_init__(self):
        object.__setattr__(self, 'weight', tuple(self.weight))
        if self.id < 1:
            raise InstanceError(f"Item id must be >= 1, got {self.id}")
        if self.value < 0:
            raise InstanceError(f"Item[{self.id}] value must be >= 0")
        if any(w < 0 for w in self.weight):
            raise InstanceError(f"Item[{self.id}] weights must be >= 0")


@dataclass(eq=False)
class Knapsack:
    """
    Immutable MKP instance: items plus one capacity per dimension.

    Numpy views of values, weights and capacity are built once at
    construction and shared by every chromosome of a run.

    Attributes:
        items: Items in instance order (ids 1..n)
        capacity: Capacity per dimension
        declared_items: Item count from the instance header (informational)
        known_optimum: Optimum declared in the instance header, if any
    """
    items: List[Item]
    capacity: Tuple[int, ...]
    declared_items: Optional[int] = None
    known_optimum: Optional[int] = None
    values: np.ndarray = field(init=False, repr=False)
    weights: np.ndarray = field(init=False, repr=False)
    capacity_array: np.ndarray = field(init=False, repr=False)

    def __post_init__(self):
        self.items = list(self.items)
        self.capacity = tuple(int(c) for c in self.capacity)

        if any(c < 0 for c in self.capacity):
            raise InstanceError(f"Capacities must be >= 0, got {list(self.capacity)}")

        dimensions = len(self.capacity)
        for index, item in enumerate(self.items):
            if item.id != index + 1:
                raise InstanceError(
                    f"Item ids must be 1..n in order: position {index} holds id {item.id}"
                )
            if len(item.weight) != dimensions:
                raise InstanceError(
                    f"Item[{item.id}] has {len(item.weight)} weights, "
                    f"expected {dimensions} (one per capacity)"
                )

        self.values = np.array([item.value for item in self.items], dtype=np.int64)
        self.weights = np.array(
            [item.weight for item in self.items], dtype=np.int64
        ).reshape(len(self.items), dimensions)
        self.capacity_array = np.array(self.capacity, dtype=np.int64)

        for array in (self.values, self.weights, self.capacity_array):
            array.setflags(write=False)

    @classmethod
    def from_lists(
        cls,
        values: Sequence[int],
        weights: Sequence[Sequence[int]],
        capacity: Sequence[int],
        **kwargs
    ) -> "Knapsack":
        """
        Build an instance from column data.

        Args:
            values: One value per item
            weights: One row per dimension, each holding one weight per item
                (the layout of the instance file)
            capacity: One capacity per dimension

        Returns:
            Knapsack with items numbered from 1
        """
        if len(weights) != len(capacity):
            raise InstanceError(
                f"Got {len(weights)} weight rows for {len(capacity)} capacities"
            )
        for row_index, row in enumerate(weights):
            if len(row) != len(values):
                raise InstanceError(
                    f"Weight row {row_index} has {len(row)} entries, expected {len(values)}"
                )

        items = [
            Item(
                id=index + 1,
                value=int(value),
                weight=tuple(int(row[index]) for row in weights),
            )
            for index, value in enumerate(values)
        ]
        return cls(items=items, capacity=tuple(capacity), **kwargs)

    def __len__(self) -> int:
        return len(self.items)

    @property
    def dimensions(self) -> int:
        return len(self.capacity)

    def consumed(self, chromosome) -> np.ndarray:
        """Weight consumed per dimension by the selected items."""
        return self.weights[chromosome.items].sum(axis=0)

    def capacity_left(self, chromosome) -> np.ndarray:
        """
        Remaining capacity per dimension for a chromosome's selection.

        Entries may be negative when the selection is infeasible.
        """
        return self.capacity_array - self.consumed(chromosome)

    def is_feasible(self, chromosome) -> bool:
        return bool(np.all(self.capacity_left(chromosome) >= 0))

    def will_fit(self, chromosome, item: Item) -> bool:
        """
        Check whether adding an item keeps every dimension non-negative.

        The chromosome is not modified. An item that is already selected is
        still charged again, so this is a pure capacity test.
        """
        left = self.capacity_left(chromosome)
        return bool(np.all(left >= self.weights[item.id - 1]))

    def total_value(self, chromosome) -> int:
        return int(self.values[chromosome.items].sum())

    def profit_density(self, item: Item, capacity_left: np.ndarray) -> float:
        """
        Toyoda-style profit density of an item against remaining capacity.

        value / sum_d(weight[d] / capacity_left[d]). Exhausted or overdrawn
        dimensions produce inf, NaN or negative terms instead of raising.
        """
        with np.errstate(divide='ignore', invalid='ignore'):
            relative = self.weights[item.id - 1] / capacity_left.astype(np.float64)
            return float(np.float64(item.value) / relative.sum())

    def compare_items(self, first: Item, second: Item, chromosome) -> int:
        """
        Order two items by profit density for a chromosome's current state.

        Returns:
            -1 if first ranks below second, 1 if above, 0 when equal or
            incomparable (NaN densities)
        """
        left = self.capacity_left(chromosome)
        return _compare_densities(
            self.profit_density(first, left),
            self.profit_density(second, left),
        )

    def rank_items(self, items: Sequence[Item], chromosome) -> List[Item]:
        """
        Sort items best-first by profit density.

        Densities are computed once against the chromosome's capacity state
        and ordered with the same rules as compare_items. The sort is stable,
        so items that compare equal keep their input order.
        """
        if not items:
            return []

        left = self.capacity_left(chromosome).astype(np.float64)
        indices = np.array([item.id - 1 for item in items])
        with np.errstate(divide='ignore', invalid='ignore'):
            densities = self.values[indices] / (self.weights[indices] / left).sum(axis=1)

        order = sorted(
            range(len(items)),
            key=cmp_to_key(lambda a, b: _compare_densities(densities[b], densities[a]))
        )
        return [items[i] for i in order]


def _compare_densities(first: float, second: float) -> int:
    if first < second:
        return -1
    if first > second:
        return 1
    return 0
