"""Row-based constructive placers and a greedy pairwise-swap improver."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass

from .model import Design, Instance

logger = logging.getLogger(__name__)

#: Swap attempts per cell used by the greedy improver by default.
GREEDY_ITERATIONS_PER_CELL = 20


@dataclass(frozen=True)
class SwapReport:
    """Wirelength before and after an improvement pass."""

    initial_cost: float
    final_cost: float

    @property
    def improvement_percent(self) -> int:
        """Relative wirelength reduction in percent, rounded half away from zero."""
        if self.initial_cost == 0:
            return 0
        ratio = (self.initial_cost - self.final_cost) / self.initial_cost * 100
        return int(math.copysign(math.floor(abs(ratio) + 0.5), ratio))


def _fill_rows(design: Design, ordered: list[Instance]) -> None:
    """Pack ``ordered`` left to right, opening a new row once a row is full."""
    row = 0
    row_width = 0.0
    for inst in ordered:
        if row_width < design.max_width:
            inst.x = row_width
            row_width += inst.width
        else:
            row += 1
            inst.x = 0.0
            row_width = inst.width
        inst.row = row
        inst.y = row * design.row_height
    design.row_count = row


def place_by_width(design: Design) -> None:
    """Place cells in rows, widest first; ties keep the design's order."""
    for inst in design.instances:
        inst.selected = False
    ordered: list[Instance] = []
    for _ in design.instances:
        candidates = [inst for inst in design.instances if not inst.selected]
        widest = max(candidates, key=lambda inst: inst.width)
        widest.selected = True
        ordered.append(widest)
    _fill_rows(design, ordered)


def place_rows(design: Design) -> None:
    """Place cells in rows in the order the design lists them."""
    _fill_rows(design, list(design.instances))


def swap_positions(first: Instance, second: Instance) -> None:
    """Exchange the positions and rows of two instances."""
    first.x, second.x = second.x, first.x
    first.y, second.y = second.y, first.y
    first.row, second.row = second.row, first.row


def greedy_swap(
    design: Design,
    iterations_per_cell: int = GREEDY_ITERATIONS_PER_CELL,
    rng: random.Random | None = None,
) -> SwapReport:
    """Try random pairwise swaps, keeping only those that shorten wirelength."""
    if iterations_per_cell < 0:
        raise ValueError(
            f"iterations per cell must not be negative, got {iterations_per_cell}"
        )
    rng = rng if rng is not None else random.Random()
    cells = design.instances
    count = len(cells)
    logger.info("Number of cells = %d", count)

    current = design.total_hpwl()
    initial = current
    logger.info("Initial cost = %f", current)

    for _ in range(count * iterations_per_cell):
        first = cells[rng.randrange(count)]
        second = cells[rng.randrange(count)]
        swap_positions(first, second)
        trial = design.total_hpwl()
        if trial < current:
            current = trial
        else:
            swap_positions(first, second)

    report = SwapReport(initial, current)
    logger.info("Greedy cost = %f", current)
    logger.info("The improvement is almost equal : %d%%", report.improvement_percent)
    return report