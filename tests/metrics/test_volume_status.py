"""Tests for target attainment statuses."""

import pytest

from trainplan.metrics.status import (
    calculate_volume_status,
    get_block_volume_statuses,
    get_program_volume_report,
    get_week_volume_statuses,
)
from trainplan.programs.locator import find_block, find_week
from trainplan.programs.targets import add_week_target


@pytest.mark.parametrize(
    "actual, expected",
    [
        (0, "red"),
        (89.999, "red"),
        (90, "yellow"),
        (99.99, "yellow"),
        (100, "green"),
        (150, "green"),
    ],
)
def test_status_boundaries(actual, expected):
    assert calculate_volume_status(actual, 100, 100).status == expected


def test_half_target_missed():
    status = calculate_volume_status(40, 50, 100)
    assert status.target == 50
    assert status.percentage == 80
    assert status.status == "red"


def test_zero_target_volume_is_red():
    status = calculate_volume_status(0, 50, 0)
    assert status.percentage == 0
    assert status.status == "red"
    assert calculate_volume_status(10, 0, 100).percentage == 0


def test_week_statuses(program, catalog):
    statuses = get_week_volume_statuses(find_week(program, "w1").week, catalog)
    assert set(statuses) == {"g-lower", "g-push"}
    # total 45, each target 22.5
    assert statuses["g-lower"].target == pytest.approx(22.5)
    assert statuses["g-lower"].percentage == pytest.approx(111.111, rel=1e-4)
    assert statuses["g-lower"].status == "green"
    assert statuses["g-push"].percentage == pytest.approx(88.889, rel=1e-4)
    assert statuses["g-push"].status == "red"


def test_target_for_group_without_volume(program, catalog, id_gen):
    result = add_week_target(program, "w2", "g-push", 20, id_generator=id_gen)
    statuses = get_week_volume_statuses(find_week(result.program, "w2").week, catalog)
    assert statuses["g-push"].actual == 0
    assert statuses["g-push"].status == "red"


def test_block_statuses(program, catalog):
    statuses = get_block_volume_statuses(find_block(program, "b1").block, catalog)
    assert statuses["g-lower"].actual == 49
    assert statuses["g-lower"].target == pytest.approx(27.6)
    assert statuses["g-lower"].status == "green"


def test_program_report_covers_nodes_with_targets(program, catalog):
    report = get_program_volume_report(program, catalog)
    assert set(report.blocks) == {"b1"}
    assert set(report.weeks) == {"w1"}
    assert report.weeks["w1"]["g-push"].status == "red"
