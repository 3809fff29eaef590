"""Tests for subtree copies.

Copies must carry entirely fresh ids, sit directly after their source and
keep every sibling list dense.
"""

import pytest

from trainplan.programs.cloner import copy_activity, copy_block, copy_day, copy_name, copy_week, regenerate_ids
from trainplan.programs.errors import ProgramInvariantError
from trainplan.programs.ids import SequentialIdGenerator
from trainplan.programs.invariants import check_order_contiguity, find_duplicate_ids
from trainplan.programs.locator import find_activity, find_block, find_day, find_week
from trainplan.programs.mutator import update_block
from trainplan.programs.serializers import program_from_document, to_storage_document
from trainplan.programs.tree import count_ids, iter_ids
from trainplan.programs.types import Program


def _assert_fresh_copy(before: Program, after: Program, clone, depth: int) -> None:
    before_ids = set(iter_ids(before))
    after_ids = set(iter_ids(after))
    clone_ids = set(iter_ids(clone, depth))
    assert before_ids < after_ids
    assert after_ids - before_ids == clone_ids
    assert len(clone_ids) == count_ids(clone, depth)
    assert find_duplicate_ids(after) == []
    assert check_order_contiguity(after) == []


def test_copy_day_scenario(id_gen):
    """One block, one week, two days: copying day 0 yields orders [0, 1, 2]."""
    program = Program.model_validate(
        {
            "id": "p",
            "name": "P",
            "blocks": [
                {
                    "id": "b",
                    "name": "B1",
                    "order": 0,
                    "weeks": [
                        {
                            "id": "w",
                            "name": "W1",
                            "order": 0,
                            "days": [
                                {"id": "day0", "name": "Push", "order": 0},
                                {"id": "day1", "name": "Pull", "order": 1},
                            ],
                        }
                    ],
                }
            ],
        }
    )
    result = copy_day(program, "day0", id_generator=id_gen)
    days = result.program.blocks[0].weeks[0].days
    assert [d.order for d in days] == [0, 1, 2]
    assert days[0].id == "day0"
    assert days[1].id == result.node_id != "day0"
    assert days[1].name == "Push (Copy)"
    assert days[2].id == "day1"
    assert days[2].order == 2


def test_copy_activity_inserted_after_source(program, id_gen):
    source = find_activity(program, "a1")
    result = copy_activity(program, "a1", id_generator=id_gen)
    copy = find_activity(result.program, result.node_id)
    assert copy.index == source.index + 1
    assert copy.day.id == "d1"
    assert [a.id for a in copy.day.activities] == ["a1", result.node_id, "a2", "a3"]
    assert [a.order for a in copy.day.activities] == [0, 1, 2, 3]
    assert copy.activity.sets == source.activity.sets
    _assert_fresh_copy(program, result.program, copy.activity, 4)


def test_copy_last_activity_appends(program, id_gen):
    result = copy_activity(program, "a3", id_generator=id_gen)
    day = find_day(result.program, "d1").day
    assert [a.order for a in day.activities] == [0, 1, 2, 3]
    assert day.activities[-1].id == result.node_id


def test_copy_week_regenerates_all_descendant_ids(program, id_gen):
    result = copy_week(program, "w1", id_generator=id_gen)
    copy = find_week(result.program, result.node_id)
    assert copy.index == 1
    assert copy.week.name == "Week 1"
    assert [w.id for w in copy.block.weeks] == ["w1", result.node_id, "w2"]
    assert [w.order for w in copy.block.weeks] == [0, 1, 2]
    # Same shape, new ids
    assert [len(d.activities) for d in copy.week.days] == [3, 2]
    assert {t.activity_group_id for t in copy.week.activity_group_targets} == {"g-lower", "g-push"}
    assert {t.id for t in copy.week.activity_group_targets}.isdisjoint({"tw1-lower", "tw1-push"})
    _assert_fresh_copy(program, result.program, copy.week, 2)


def test_copy_block_names_and_positions(program, id_gen):
    result = copy_block(program, "b1", id_generator=id_gen)
    blocks = result.program.blocks
    assert [b.id for b in blocks] == ["b1", result.node_id, "b2"]
    assert [b.order for b in blocks] == [0, 1, 2]
    assert blocks[1].name == "B1 (Copy)"
    assert blocks[1].weeks[0].name == "Week 1"
    # 1 block + 1 target + 2 weeks + 2 week targets + 3 days + 6 activities
    assert count_ids(blocks[1], 1) == 15
    _assert_fresh_copy(program, result.program, blocks[1], 1)


def test_copy_leaves_source_untouched(program, id_gen):
    before = program.model_dump()
    result = copy_block(program, "b1", id_generator=id_gen)
    assert program.model_dump() == before
    assert find_block(result.program, "b1").block == program.blocks[0]


def test_repeated_copies_stay_unique(program):
    p = program
    for _ in range(3):
        p = copy_day(p, "d1").program
        p = copy_activity(p, "a4").program
    assert find_duplicate_ids(p) == []
    assert check_order_contiguity(p) == []
    assert len(find_week(p, "w1").week.days) == 5


@pytest.mark.parametrize("copy_fn", [copy_block, copy_week, copy_day, copy_activity])
def test_copy_missing_is_not_found(program, copy_fn):
    result = copy_fn(program, "ghost")
    assert result.status == "not_found"
    assert result.program is program


def test_copy_with_colliding_generator_raises(program):
    """A generator that hands out an existing id must never produce a silent duplicate."""
    colliding = SequentialIdGenerator(prefix="a")  # yields a1, a2, ...
    with pytest.raises(ProgramInvariantError) as exc_info:
        copy_day(program, "d2", id_generator=colliding)
    assert exc_info.value.code == "REUSED_ID"
    assert any(d.startswith("REUSED_ID") for d in exc_info.value.details)


def test_regenerate_ids_is_recursive(program, id_gen):
    block = program.blocks[0]
    clone = regenerate_ids(block, 1, id_gen)
    assert set(iter_ids(clone, 1)).isdisjoint(iter_ids(block, 1))
    assert clone.weeks[0].days[0].activities[0].activity_template_id == "tpl-squat"


def test_copy_of_long_name_stays_within_name_limit(program, id_gen):
    program = update_block(program, "b1", {"name": "x" * 98}).program
    result = copy_block(program, "b1", id_generator=id_gen)
    copy = find_block(result.program, result.node_id).block
    assert copy.name == "x" * 93 + " (Copy)"
    assert len(copy.name) == 100

    again = copy_block(result.program, result.node_id, id_generator=id_gen)
    assert find_block(again.program, again.node_id).block.name == copy.name

    reloaded = program_from_document(to_storage_document(again.program), id_generator=id_gen)
    assert [len(b.name) for b in reloaded.blocks] == [98, 100, 100, 2]


def test_copy_name_keeps_short_names_whole():
    assert copy_name("Day 1", " (Copy)") == "Day 1 (Copy)"
    assert copy_name("a" * 92 + "  b", " (Copy)") == "a" * 92 + " (Copy)"
