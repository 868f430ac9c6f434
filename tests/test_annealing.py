import random

import pytest

from cellplace.annealing import AnnealReport, anneal, anneal_and_legalize, legalize
from cellplace.model import Instance, build_design
from cellplace.placers import place_rows


def _design():
    cells = [Instance(f"u{i}", "INV", 4.0, 2.0) for i in range(6)]
    nets = [
        ("n1", [("u0", True), ("u5", False)]),
        ("n2", [("u1", True), ("u4", False), ("u2", False)]),
        ("n3", [("u3", True), ("u0", False)]),
        ("POWR", [("u0", False), ("u1", False)]),
    ]
    return build_design(cells, nets)


def _positions(design):
    return sorted((inst.x, inst.y, inst.row) for inst in design.instances)


def _rows_packed(design):
    for row in range(design.row_count + 1):
        members = sorted(
            (inst for inst in design.instances if inst.row == row), key=lambda i: i.x
        )
        edge = 0.0
        for inst in members:
            if inst.x != edge:
                return False
            edge += inst.width
    return True


def test_anneal_preserves_slots_and_reports_current_cost():
    design = _design()
    place_rows(design)
    before = _positions(design)
    report = anneal(design, 50.0, 1.0, 0.8, 5, random.Random(3))
    assert _positions(design) == before
    assert report.final_cost == design.total_hpwl()


def test_anneal_without_rounds_changes_nothing():
    design = _design()
    place_rows(design)
    before = [(i.name, i.x, i.y) for i in design.instances]
    report = anneal(design, 5.0, 5.0, 0.9, 10, random.Random(1))
    assert report.initial_cost == report.final_cost
    assert [(i.name, i.x, i.y) for i in design.instances] == before


def test_cold_anneal_never_worsens():
    design = _design()
    place_rows(design)
    start = design.total_hpwl()
    report = anneal(design, 1e-6, 1e-7, 0.5, 20, random.Random(7))
    assert report.initial_cost == start
    assert report.final_cost <= start


def test_anneal_is_reproducible_with_seed():
    first, second = _design(), _design()
    place_rows(first)
    place_rows(second)
    anneal(first, 100.0, 10.0, 0.7, 4, random.Random(11))
    anneal(second, 100.0, 10.0, 0.7, 4, random.Random(11))
    assert [(i.x, i.y) for i in first.instances] == [(i.x, i.y) for i in second.instances]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"temperature": 0},
        {"min_temperature": 0},
        {"cooling": 1.0},
        {"cooling": 0.0},
        {"iterations_per_cell": -1},
    ],
)
def test_anneal_rejects_bad_schedule(kwargs):
    design = _design()
    with pytest.raises(ValueError):
        anneal(design, rng=random.Random(0), **kwargs)


def test_legalize_packs_rows_in_position_order():
    design = _design()
    design.row_count = 1
    layout = [(0, 10.0), (0, 3.0), (0, 7.0), (1, 1.0), (1, 0.0), (1, 9.0)]
    for inst, (row, x) in zip(design.instances, layout):
        inst.row = row
        inst.x = x
    legalize(design)
    assert [i.x for i in design.instances] == [8.0, 0.0, 4.0, 4.0, 0.0, 8.0]
    assert _rows_packed(design)


def test_legalize_compares_against_truncated_minimum():
    design = _design()
    design.row_count = 0
    for inst in design.instances:
        inst.row = 5
    first, second = design.instances[0], design.instances[1]
    first.row = second.row = 0
    first.x, second.x = 1.5, 1.2
    legalize(design)
    assert first.x == 0.0
    assert second.x == first.width


def test_legalize_returns_current_cost():
    design = _design()
    place_rows(design)
    assert legalize(design) == design.total_hpwl()


def test_anneal_and_legalize_gives_packed_rows():
    design = _design()
    reference = _design()
    place_rows(reference)
    report = anneal_and_legalize(design, random.Random(5))
    assert report.initial_cost == reference.total_hpwl()
    assert report.legalized_cost == design.total_hpwl()
    assert _rows_packed(design)


def test_report_improvements():
    report = AnnealReport(100.0, 50.0, 25.0)
    assert report.annealed_improvement == 50
    assert report.legalized_improvement == 75
    assert AnnealReport(0.0, 0.0, 0.0).legalized_improvement == 0