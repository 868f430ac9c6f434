"""Netlist model for row-based standard-cell placement."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field, replace

logger = logging.getLogger(__name__)

#: Database units per micron used when reporting wirelength.
DBU = 2000
#: Area overhead allowed when estimating the layout dimension.
WHITE_SPACE = 1.1
#: Nets that carry supply and are left out of placement.
SUPPLY_NETS = frozenset({"POWR", "GRND"})

_INITIAL_MIN = 0x7FFFFFFF


@dataclass
class Instance:
    """A placed cell instance; ``x``/``y`` are its top-left corner."""

    name: str
    cell_name: str
    width: float
    height: float
    x: float = 0.0
    y: float = 0.0
    row: int = 0
    inst_id: int = 0
    selected: bool = False


@dataclass
class Net:
    """A signal net joining instances; ``source`` drives it, if known."""

    name: str
    instances: list[Instance] = field(default_factory=list)
    source: Instance | None = None


@dataclass(frozen=True)
class PlacementResult:
    """Extent of a placement as reported back to the layout database."""

    width: int
    height: int
    row_count: int
    row_height: int


@dataclass
class Design:
    """Instances and nets of a design together with its layout frame."""

    instances: list[Instance]
    nets: list[Net]
    row_height: float
    max_width: int
    max_height: int
    row_count: int = 0

    def find_instance(self, name: str) -> Instance | None:
        """Return the first instance called ``name``, or None."""
        return next((inst for inst in self.instances if inst.name == name), None)

    def total_hpwl(self) -> float:
        """Total half-perimeter wirelength over all nets, in microns.

        The bounding box is grown pin by pin and its half perimeter is
        accumulated after every pin; coordinates are truncated to integers.
        """
        total = 0
        for net in self.nets:
            wirelength = 0
            min_x = min_y = _INITIAL_MIN
            max_x = max_y = -1
            for inst in net.instances:
                if inst.x < min_x:
                    min_x = int(inst.x)
                if inst.x > max_x:
                    max_x = int(inst.x)
                if inst.y < min_y:
                    min_y = int(inst.y)
                if inst.y > max_y:
                    max_y = int(inst.y)
                wirelength += (max_y - min_y) + (max_x - min_x)
            total += wirelength
        return total / DBU

    def layout_extent(self) -> PlacementResult:
        """Bounding extent of the current placement."""
        max_x = 0
        max_y = 0
        for inst in self.instances:
            right = inst.x + inst.width
            bottom = inst.y + inst.height
            if right > max_x:
                max_x = int(right)
            if bottom > max_y:
                max_y = int(bottom)
        return PlacementResult(max_x, max_y, self.row_count, int(self.row_height))


def estimate_layout_size(instances: Iterable[Instance], row_height: float) -> int:
    """Side of a square layout holding the cells, rounded down to whole rows."""
    step = int(row_height)
    if step <= 0:
        raise ValueError(f"row height must be at least 1, got {row_height!r}")
    area = sum(inst.width * inst.height for inst in instances)
    dim = math.floor(math.sqrt(area * WHITE_SPACE))
    return int(dim - dim % step)


def build_design(
    instances: Iterable[Instance],
    nets: Iterable[tuple[str, Iterable[tuple[str, bool]]]],
) -> Design:
    """Build a design from instances and nets.

    Each net is a pair of its name and its pins; a pin is a pair of the
    instance name and whether the pin is an output. Supply nets are
    ignored, and pins naming unknown instances are dropped.
    """
    placed = [
        replace(inst, inst_id=number, x=0.0, y=0.0, row=0, selected=False)
        for number, inst in enumerate(instances, start=1)
    ]
    if not placed:
        raise ValueError("a design needs at least one instance")
    row_height = placed[-1].height

    by_name: dict[str, Instance] = {}
    for inst in placed:
        by_name.setdefault(inst.name, inst)

    net_list: list[Net] = []
    for net_name, pins in nets:
        if net_name in SUPPLY_NETS:
            logger.info("Net %s is ignored.", net_name)
            continue
        net = Net(net_name)
        for inst_name, is_output in pins:
            inst = by_name.get(inst_name)
            if inst is None:
                logger.warning("Netlist annotation error: no instance %s", inst_name)
                continue
            net.instances.append(inst)
            if is_output:
                net.source = inst
        net_list.append(net)

    size = estimate_layout_size(placed, row_height)
    return Design(placed, net_list, row_height, size, size)