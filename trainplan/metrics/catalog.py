"""Activity template catalog - the join from activity to activity group.

The template-management collaborator owns templates. Volume bucketing only
needs each template's group id, so the catalog keeps just that mapping.
"""

from collections.abc import Iterable, Mapping

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ActivityTemplateRef(BaseModel):
    """The slice of an activity template volume bucketing depends on."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    group_id: str | None = None


class TemplateCatalog:
    """Lookup from activity template id to activity group id."""

    def __init__(self, groups_by_template: Mapping[str, str] | None = None) -> None:
        self._groups = dict(groups_by_template or {})

    @classmethod
    def from_templates(cls, templates: Iterable[ActivityTemplateRef | Mapping]) -> "TemplateCatalog":
        """Build a catalog from template records; templates without a group are skipped."""
        groups = {}
        for template in templates:
            ref = template if isinstance(template, ActivityTemplateRef) else ActivityTemplateRef.model_validate(template)
            if ref.group_id:
                groups[ref.id] = ref.group_id
        return cls(groups)

    def group_of(self, activity_template_id: str) -> str | None:
        return self._groups.get(activity_template_id)

    def __len__(self) -> int:
        return len(self._groups)


TemplateSource = TemplateCatalog | Mapping[str, str] | Iterable[ActivityTemplateRef | Mapping]


def as_catalog(templates: TemplateSource) -> TemplateCatalog:
    """Accept a catalog, a template id → group id mapping, or template records."""
    if isinstance(templates, TemplateCatalog):
        return templates
    if isinstance(templates, Mapping):
        return TemplateCatalog(templates)
    return TemplateCatalog.from_templates(templates)
