"""Mapping between Program values and storage documents.

The storage collaborator keys subdocuments by `_id`. Nodes still carrying a
temporary id are written without `_id` so the store assigns a permanent one;
passing a temporary id through would make the store persist it verbatim.
Activities are stored flat with only the fields of their type.

Documents coming back from storage are not trusted to be dense: children are
sorted by their stored `order` and renumbered.
"""

from collections.abc import Mapping
from typing import Any

from loguru import logger
from pydantic.alias_generators import to_snake

from trainplan.programs.ids import IdGenerator, default_id_generator, is_temp_id
from trainplan.programs.tree import iter_ids
from trainplan.programs.types import (
    Activity,
    ActivityGroupTarget,
    Block,
    CardioActivity,
    Day,
    LiftActivity,
    Program,
    Week,
)

_ACTIVITY_COMMON = {"id", "order", "type", "activity_template_id"}
_STATIC_CARDIO_FIELDS = ("cardio_type", "time", "distance", "distance_unit", "repetitions")
_BENCHMARK_CARDIO_FIELDS = ("template_sub_max_id", "percentage_of_max")


def _with_storage_id(node_id: str, body: dict[str, Any]) -> dict[str, Any]:
    if is_temp_id(node_id):
        return body
    return {"_id": node_id, **body}


def _target_document(target: ActivityGroupTarget) -> dict[str, Any]:
    return _with_storage_id(
        target.id,
        {"activityGroupId": target.activity_group_id, "targetPercentage": target.target_percentage},
    )


def _activity_document(activity: Activity) -> dict[str, Any]:
    body: dict[str, Any] = {
        "type": activity.type,
        "order": activity.order,
        "activityTemplateId": activity.activity_template_id,
    }
    if isinstance(activity, LiftActivity):
        body["sets"] = [s.model_dump(mode="json", by_alias=True, exclude_none=True) for s in activity.sets]
    elif isinstance(activity, CardioActivity):
        body.update(activity.prescription.model_dump(mode="json", by_alias=True, exclude_none=True, exclude={"kind"}))
    else:
        body.update(activity.model_dump(mode="json", by_alias=True, exclude_none=True, exclude=_ACTIVITY_COMMON))
    return _with_storage_id(activity.id, body)


def _day_document(day: Day) -> dict[str, Any]:
    return _with_storage_id(
        day.id,
        {
            "name": day.name,
            "order": day.order,
            "activities": [_activity_document(a) for a in day.activities],
        },
    )


def _week_document(week: Week) -> dict[str, Any]:
    return _with_storage_id(
        week.id,
        {
            "name": week.name,
            "order": week.order,
            "activityGroupTargets": [_target_document(t) for t in week.activity_group_targets],
            "days": [_day_document(d) for d in week.days],
        },
    )


def _block_document(block: Block) -> dict[str, Any]:
    return _with_storage_id(
        block.id,
        {
            "name": block.name,
            "order": block.order,
            "activityGroupTargets": [_target_document(t) for t in block.activity_group_targets],
            "weeks": [_week_document(w) for w in block.weeks],
        },
    )


def to_storage_document(program: Program) -> dict[str, Any]:
    """Convert a program into the document shape the storage collaborator persists.

    Args:
        program: Program to convert

    Returns:
        camelCase document; permanent ids as `_id`, temporary ids omitted
    """
    body: dict[str, Any] = {
        "name": program.name,
        "currentProgress": program.current_progress.model_dump(by_alias=True),
        "blocks": [_block_document(b) for b in program.blocks],
    }
    if program.description is not None:
        body["description"] = program.description
    return _with_storage_id(program.id, body)


def _read_id(doc: Mapping[str, Any], id_generator: IdGenerator) -> str:
    node_id = doc.get("_id") or doc.get("id")
    return str(node_id) if node_id else id_generator.next_id()


def _read_children(docs: list[Mapping[str, Any]] | None) -> list[tuple[int, Mapping[str, Any]]]:
    ordered = sorted(docs or [], key=lambda doc: doc.get("order") or 0)
    return list(enumerate(ordered))


def _read_targets(docs: list[Mapping[str, Any]] | None, id_generator: IdGenerator) -> list[dict[str, Any]]:
    return [
        {
            "id": _read_id(doc, id_generator),
            "activity_group_id": str(doc.get("activityGroupId", doc.get("activity_group_id"))),
            "target_percentage": doc.get("targetPercentage", doc.get("target_percentage")),
        }
        for doc in docs or []
    ]


def _read_activity(doc: Mapping[str, Any], order: int, id_generator: IdGenerator) -> dict[str, Any]:
    data = {to_snake(key): value for key, value in doc.items() if key not in ("_id", "id", "order")}
    data["id"] = _read_id(doc, id_generator)
    data["order"] = order
    if data.get("type") == "cardio" and "prescription" not in data:
        if data.get("template_sub_max_id"):
            fields, kind = _BENCHMARK_CARDIO_FIELDS, "benchmark"
        else:
            fields, kind = _STATIC_CARDIO_FIELDS, "static"
        data["prescription"] = {"kind": kind, **{f: data.pop(f) for f in fields if data.get(f) is not None}}
    return data


def program_from_document(doc: Mapping[str, Any], *, id_generator: IdGenerator | None = None) -> Program:
    """Build a Program from a storage document.

    Args:
        doc: Stored program document (`_id` or `id` keys, camelCase fields)
        id_generator: Source of ids for subdocuments stored without one

    Returns:
        Validated Program with dense sibling orders

    Raises:
        pydantic.ValidationError: If the document does not describe a valid program
    """
    gen = id_generator or default_id_generator()
    data = {
        "id": _read_id(doc, gen),
        "name": doc.get("name"),
        "description": doc.get("description"),
        "current_progress": doc.get("currentProgress") or doc.get("current_progress") or {},
        "blocks": [
            {
                "id": _read_id(block, gen),
                "name": block.get("name"),
                "order": bi,
                "activity_group_targets": _read_targets(block.get("activityGroupTargets"), gen),
                "weeks": [
                    {
                        "id": _read_id(week, gen),
                        "name": week.get("name"),
                        "order": wi,
                        "activity_group_targets": _read_targets(week.get("activityGroupTargets"), gen),
                        "days": [
                            {
                                "id": _read_id(day, gen),
                                "name": day.get("name"),
                                "order": di,
                                "activities": [
                                    _read_activity(activity, ai, gen)
                                    for ai, activity in _read_children(day.get("activities"))
                                ],
                            }
                            for di, day in _read_children(week.get("days"))
                        ],
                    }
                    for wi, week in _read_children(block.get("weeks"))
                ],
            }
            for bi, block in _read_children(doc.get("blocks"))
        ],
    }
    program = Program.model_validate(data)
    logger.debug(f"Loaded program {program.id} with {len(collect_temp_ids(program))} temporary ids")
    return program


def collect_temp_ids(program: Program) -> list[str]:
    """Ids in the program still awaiting a permanent id from storage."""
    return [node_id for node_id in iter_ids(program) if is_temp_id(node_id)]
