"""Training program tree model.

Program → Block → Week → Day → Activity → Set.

All nodes are immutable. Edits never touch a node in place; they produce a
new Program value (see mutator, cloner and reorder). Sibling `order` values
mirror list position and ids are unique across the whole Program.

Field names are snake_case; camelCase aliases are accepted on input and
produced with `model_dump(by_alias=True)`, which is the shape UI and storage
collaborators exchange.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, TypeAdapter, model_validator
from pydantic.alias_generators import to_camel

NAME_MAX_LENGTH = 100

NodeName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=NAME_MAX_LENGTH)]

ActivityType = Literal["lift", "cardio", "benchmark", "other"]
CardioType = Literal["time", "distance", "repetitions"]


class DistanceUnit(str, Enum):
    MILES = "miles"
    KILOMETERS = "kilometers"
    METERS = "meters"
    YARDS = "yards"


class TreeModel(BaseModel):
    """Base for every tree value: frozen, camelCase aliases."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Set(TreeModel):
    """A single prescribed set within a lift activity.

    Attributes:
        reps: Repetitions (at least 1)
        percentage_of_max: Load as a percentage of the referenced max (0-200)
        benchmark_template_id: Optional benchmark sub-max this set is loaded from
    """

    reps: int = Field(ge=1)
    percentage_of_max: float | None = Field(default=None, ge=0, le=200)
    benchmark_template_id: str | None = None


class StaticCardio(TreeModel):
    """Fixed cardio prescription (time, distance or repetitions)."""

    kind: Literal["static"] = "static"
    cardio_type: CardioType
    time: int | None = Field(default=None, ge=0)  # minutes
    distance: float | None = Field(default=None, ge=0)
    distance_unit: DistanceUnit | None = None
    repetitions: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def check_matching_value(self) -> "StaticCardio":
        if getattr(self, self.cardio_type) is None:
            raise ValueError(f"cardio_type={self.cardio_type!r} requires a {self.cardio_type} value")
        return self


class BenchmarkCardio(TreeModel):
    """Cardio prescribed relative to an athlete's benchmark sub-max."""

    kind: Literal["benchmark"] = "benchmark"
    template_sub_max_id: str
    percentage_of_max: float = Field(ge=0, le=200)


CardioPrescription = Annotated[Union[StaticCardio, BenchmarkCardio], Field(discriminator="kind")]


class ActivityBase(TreeModel):
    id: str
    order: int = Field(ge=0)
    activity_template_id: str


class LiftActivity(ActivityBase):
    type: Literal["lift"] = "lift"
    sets: tuple[Set, ...] = ()


class CardioActivity(ActivityBase):
    type: Literal["cardio"] = "cardio"
    prescription: CardioPrescription


class BenchmarkActivity(ActivityBase):
    type: Literal["benchmark"] = "benchmark"
    benchmark_template_id: str | None = None
    notes: str | None = None


class OtherActivity(ActivityBase):
    type: Literal["other"] = "other"
    notes: str | None = None
    time: int | None = Field(default=None, ge=0)


Activity = Annotated[
    Union[LiftActivity, CardioActivity, BenchmarkActivity, OtherActivity],
    Field(discriminator="type"),
]

ACTIVITY_VARIANTS: tuple[type[ActivityBase], ...] = (LiftActivity, CardioActivity, BenchmarkActivity, OtherActivity)

activity_adapter: TypeAdapter[Activity] = TypeAdapter(Activity)


class ActivityGroupTarget(TreeModel):
    """Declared share of total volume for one activity group.

    Attributes:
        id: Target identifier
        activity_group_id: External activity group reference
        target_percentage: Expected share of total volume (0-100)
    """

    id: str
    activity_group_id: str
    target_percentage: float = Field(ge=0, le=100)


class Day(TreeModel):
    id: str
    name: NodeName
    order: int = Field(ge=0)
    activities: tuple[Activity, ...] = ()


class Week(TreeModel):
    id: str
    name: NodeName
    order: int = Field(ge=0)
    activity_group_targets: tuple[ActivityGroupTarget, ...] = ()
    days: tuple[Day, ...] = ()


class Block(TreeModel):
    id: str
    name: NodeName
    order: int = Field(ge=0)
    activity_group_targets: tuple[ActivityGroupTarget, ...] = ()
    weeks: tuple[Week, ...] = ()


class ProgramProgress(TreeModel):
    """Current position in the program.

    Owned by the progression concern; tree edits carry it through untouched.
    """

    block_index: int = Field(default=0, ge=0)
    week_index: int = Field(default=0, ge=0)
    started_at: datetime | None = None
    completed_at: datetime | None = None
    last_advanced_at: datetime | None = None
    total_weeks_completed: int = Field(default=0, ge=0)


class Program(TreeModel):
    id: str
    name: NodeName
    description: str | None = Field(default=None, max_length=500)
    blocks: tuple[Block, ...] = ()
    current_progress: ProgramProgress = ProgramProgress()


Node = Union[Block, Week, Day, LiftActivity, CardioActivity, BenchmarkActivity, OtherActivity]
