# cellplace

A small row-based standard-cell placer. A design is a list of cell
instances (all the same height) and a list of nets connecting them. The
package estimates a square layout size from the total cell area, puts the
cells into rows, improves the placement by swapping cells, and scores it
by total half-perimeter wirelength (HPWL).

## Installing

```
pip install .
```

The package has no third-party dependencies. To run the tests,
install the `test` extra (`pip install .[test]`) and run `pytest`.

## Building a design

```python
from cellplace.model import Instance, build_design

cells = [
    Instance(name="u1", cell_name="NAND2", width=4000, height=2000),
    Instance(name="u2", cell_name="INV", width=2000, height=2000),
    Instance(name="u3", cell_name="DFF", width=8000, height=2000),
]
nets = [
    # (net name, [(instance name, pin is an output), ...])
    ("n1", [("u1", True), ("u2", False)]),
    ("n2", [("u2", True), ("u3", False)]),
    ("POWR", [("u1", False), ("u2", False), ("u3", False)]),
]
design = build_design(cells, nets)
```

`build_design`:

- copies the instances, numbering them from 1 and resetting their
  positions and rows;
- takes the row height from the height of the last instance;
- drops the supply nets `POWR` and `GRND`;
- drops, with a logged warning, any pin that names an unknown instance,
  and records an output pin's instance as the net's `source`;
- sets the layout's `max_width` and `max_height` with
  `estimate_layout_size`: the square root of the total cell area with
  10% white space, rounded down to a whole number and then down to a
  multiple of the row height.

It raises `ValueError` for an empty instance list, and
`estimate_layout_size` raises `ValueError` when the row height is below 1.

On a `Design`:

- `find_instance(name)` returns the first instance with that name, or
  `None`;
- `total_hpwl()` returns the wirelength score in microns (database units
  divided by 2000). The bounding box of each net is grown pin by pin with
  coordinates truncated to integers, and its half perimeter is added after
  every pin;
- `layout_extent()` returns a `PlacementResult` with the width and height
  of the placed cells' bounding box, the row count and the row height.

## Placing

Every placer works on the design in place.

```python
import random
from cellplace.placers import place_by_width, place_rows, greedy_swap
from cellplace.annealing import anneal, legalize, anneal_and_legalize

place_by_width(design)          # widest cells first, filling rows left to right

place_rows(design)              # cells in design order, filling rows
report = greedy_swap(design, 20, random.Random(1))
print(report.initial_cost, report.final_cost, report.improvement_percent)

report = anneal_and_legalize(design, random.Random(1))
print(report.initial_cost, report.annealed_cost, report.legalized_cost)
print(report.annealed_improvement, report.legalized_improvement)
```

- `place_rows` and `place_by_width` fill a row from x = 0 while its
  running width is below `max_width`, then start a new row; they set each
  instance's `x`, `y` and `row` and the design's `row_count` (the index of
  the last row). `place_by_width` orders cells by decreasing width, ties
  keeping the design's order.
- `swap_positions(first, second)` exchanges two instances' positions and
  rows.
- `greedy_swap(design, iterations_per_cell=20, rng=None)` makes
  `iterations_per_cell` × cell-count random swap attempts and keeps a swap
  only when it lowers the wirelength. It returns a `SwapReport`.
- `anneal(design, temperature=1000, min_temperature=5, cooling=0.99,
  iterations_per_cell=10, rng=None)` does the same while the temperature
  is above the minimum, multiplying it by `cooling` after every round. A
  worse swap is kept with probability `exp(-delta / T)`; a swap that
  leaves the wirelength unchanged is undone. Bad parameters raise
  `ValueError`. It returns a `SwapReport`.
- Swapped cells of different widths can overlap, so `legalize(design)`
  packs each row again from x = 0, taking the cells in order of their
  position along the row, and returns the wirelength afterwards.
- `anneal_and_legalize(design, rng=None)` runs `place_rows`, `anneal`
  with the default schedule and `legalize`, and returns an `AnnealReport`.

`improvement_percent`, `annealed_improvement` and `legalized_improvement`
give the relative wirelength reduction in percent, rounded half away from
zero (0 when the initial cost is 0). Progress is reported through the
standard `logging` module.

## Saving and loading placements

```python
from cellplace.dump import write_dump, read_dump

write_dump(design, "placement.txt")
loaded = read_dump(design, "placement.txt")
```

The dump file starts with a line holding the number of cells, the layout
width and height and the row count, followed by one line per cell with
its name and top-left x and y. `read_dump` sets those positions and the
layout frame on the design and returns the number of instances loaded.
A file that cannot be opened, a malformed or truncated file, or one that
names an unknown instance raises `DumpError`.

## What it does not do

There is no command-line program, and no reader or writer for netlist
or layout file formats: designs are built in Python with `build_design`,
and results are read from the `Design` objects (or saved with
`write_dump`).