"""Simulated-annealing placement improvement followed by row legalization."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass

from .model import Design, Instance
from .placers import SwapReport, place_rows, swap_positions

logger = logging.getLogger(__name__)

#: Starting temperature of the annealing schedule.
ANNEAL_TEMPERATURE = 1000.0
#: Annealing stops once the temperature falls to this value.
ANNEAL_MIN_TEMPERATURE = 5.0
#: Factor applied to the temperature after every round.
ANNEAL_COOLING = 0.99
#: Swap attempts per cell in every annealing round.
ANNEAL_ITERATIONS_PER_CELL = 10

_INT_MAX = 2**31 - 1


@dataclass(frozen=True)
class AnnealReport:
    """Wirelength at the start, after annealing and after legalization."""

    initial_cost: float
    annealed_cost: float
    legalized_cost: float

    @property
    def annealed_improvement(self) -> int:
        """Reduction by annealing in percent, rounded half away from zero."""
        return SwapReport(self.initial_cost, self.annealed_cost).improvement_percent

    @property
    def legalized_improvement(self) -> int:
        """Reduction after legalization in percent, rounded half away from zero."""
        return SwapReport(self.initial_cost, self.legalized_cost).improvement_percent


def anneal(
    design: Design,
    temperature: float = ANNEAL_TEMPERATURE,
    min_temperature: float = ANNEAL_MIN_TEMPERATURE,
    cooling: float = ANNEAL_COOLING,
    iterations_per_cell: int = ANNEAL_ITERATIONS_PER_CELL,
    rng: random.Random | None = None,
) -> SwapReport:
    """Improve the current placement by simulated annealing of pairwise swaps.

    A swap that shortens wirelength is kept; one that lengthens it is kept
    with probability ``exp(-delta / T)``; one that leaves it unchanged is
    undone.
    """
    if temperature <= 0:
        raise ValueError(f"temperature must be positive, got {temperature}")
    if min_temperature <= 0:
        raise ValueError(f"minimum temperature must be positive, got {min_temperature}")
    if not 0 < cooling < 1:
        raise ValueError(f"cooling factor must lie strictly between 0 and 1, got {cooling}")
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

    attempts = count * iterations_per_cell
    while temperature > min_temperature:
        for _ in range(attempts):
            first = cells[rng.randrange(count)]
            second = cells[rng.randrange(count)]
            swap_positions(first, second)
            trial = design.total_hpwl()
            draw = rng.random()
            delta = trial - current
            if delta < 0:
                current = trial
            elif delta > 0 and draw < math.exp(-delta / temperature):
                current = trial
            else:
                swap_positions(first, second)
        temperature *= cooling

    report = SwapReport(initial, current)
    logger.info("Simulated Annealing cost = %f", current)
    logger.info(
        "The improvement after Simulated Annealing is almost equal to : %d%%",
        report.improvement_percent,
    )
    return report


def _next_in_row(candidates: list[Instance]) -> Instance | None:
    """Leftmost candidate; the running minimum is kept truncated to an integer."""
    chosen = None
    lowest = _INT_MAX
    for inst in candidates:
        if inst.x < lowest:
            chosen = inst
            lowest = int(inst.x)
    return chosen


def legalize(design: Design) -> float:
    """Pack every row left to right in order of position, removing overlaps.

    Returns the wirelength after legalization.
    """
    for row in range(design.row_count + 1):
        pending = [inst for inst in design.instances if inst.row == row]
        row_width = 0.0
        while pending:
            inst = _next_in_row(pending)
            if inst is None:
                break
            pending.remove(inst)
            inst.x = row_width
            row_width += inst.width
    cost = design.total_hpwl()
    logger.info("Cost after legalization = %f", cost)
    return cost


def anneal_and_legalize(design: Design, rng: random.Random | None = None) -> AnnealReport:
    """Place rows in order, anneal with the default schedule, then legalize."""
    place_rows(design)
    annealed = anneal(design, rng=rng)
    legalized = legalize(design)
    report = AnnealReport(annealed.initial_cost, annealed.final_cost, legalized)
    logger.info(
        "The improvement after legalization is almost equal to : %d%%",
        report.legalized_improvement,
    )
    return report