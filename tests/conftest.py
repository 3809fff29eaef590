"""Root conftest for all tests.

This file makes shared fixtures available across all test modules.
"""

import pytest
from loguru import logger

from trainplan.config.settings import settings
from trainplan.metrics.catalog import TemplateCatalog
from trainplan.programs.ids import SequentialIdGenerator
from trainplan.programs.types import Program

# Template catalog shared by the sample program:
# squat and deadlift are lower body (g-lower), bench is upper push (g-push),
# rowing is conditioning (g-cond), mobility has no group.
TEMPLATES = [
    {"id": "tpl-squat", "groupId": "g-lower"},
    {"id": "tpl-deadlift", "groupId": "g-lower"},
    {"id": "tpl-bench", "groupId": "g-push"},
    {"id": "tpl-row", "groupId": "g-cond"},
    {"id": "tpl-mobility"},
]


def lift(activity_id: str, template_id: str, reps: list[int], order: int) -> dict:
    return {
        "id": activity_id,
        "order": order,
        "type": "lift",
        "activityTemplateId": template_id,
        "sets": [{"reps": r, "percentageOfMax": 75} for r in reps],
    }


@pytest.fixture(autouse=True)
def strict_invariants():
    """Run every test with post-edit invariant checks enabled."""
    previous = settings.strict_invariants
    settings.strict_invariants = True
    yield
    settings.strict_invariants = previous


@pytest.fixture
def id_gen() -> SequentialIdGenerator:
    return SequentialIdGenerator(prefix="temp_")


@pytest.fixture
def catalog() -> TemplateCatalog:
    return TemplateCatalog.from_templates(TEMPLATES)


@pytest.fixture
def log_messages():
    """Collect loguru records emitted during the test."""
    records: list = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


@pytest.fixture
def program() -> Program:
    """Two blocks; B1 has two weeks with lifts, cardio and other activities.

    Week 1 volume: g-lower 15 + 10 = 25, g-push 20, g-cond 0 (total 45)
    Week 2 volume: g-lower 24 (total 24)
    Block 1 volume: g-lower 49, g-push 20, g-cond 0 (total 69)
    """
    return Program.model_validate(
        {
            "id": "p1",
            "name": "Strength Cycle",
            "currentProgress": {"blockIndex": 0, "weekIndex": 1, "totalWeeksCompleted": 1},
            "blocks": [
                {
                    "id": "b1",
                    "name": "B1",
                    "order": 0,
                    "activityGroupTargets": [
                        {"id": "tb1-lower", "activityGroupId": "g-lower", "targetPercentage": 40},
                    ],
                    "weeks": [
                        {
                            "id": "w1",
                            "name": "Week 1",
                            "order": 0,
                            "activityGroupTargets": [
                                {"id": "tw1-lower", "activityGroupId": "g-lower", "targetPercentage": 50},
                                {"id": "tw1-push", "activityGroupId": "g-push", "targetPercentage": 50},
                            ],
                            "days": [
                                {
                                    "id": "d1",
                                    "name": "Day 1",
                                    "order": 0,
                                    "activities": [
                                        lift("a1", "tpl-squat", [5, 5, 5], 0),
                                        lift("a2", "tpl-bench", [10, 10], 1),
                                        {
                                            "id": "a3",
                                            "order": 2,
                                            "type": "cardio",
                                            "activityTemplateId": "tpl-row",
                                            "prescription": {"kind": "static", "cardioType": "time", "time": 10},
                                        },
                                    ],
                                },
                                {
                                    "id": "d2",
                                    "name": "Day 2",
                                    "order": 1,
                                    "activities": [
                                        lift("a4", "tpl-deadlift", [5, 5], 0),
                                        {
                                            "id": "a5",
                                            "order": 1,
                                            "type": "other",
                                            "activityTemplateId": "tpl-mobility",
                                            "notes": "Hips",
                                        },
                                    ],
                                },
                            ],
                        },
                        {
                            "id": "w2",
                            "name": "Week 2",
                            "order": 1,
                            "days": [
                                {
                                    "id": "d3",
                                    "name": "Day 1",
                                    "order": 0,
                                    "activities": [lift("a6", "tpl-squat", [8, 8, 8], 0)],
                                },
                            ],
                        },
                    ],
                },
                {
                    "id": "b2",
                    "name": "B2",
                    "order": 1,
                    "weeks": [{"id": "w3", "name": "Week 1", "order": 0}],
                },
            ],
        }
    )
