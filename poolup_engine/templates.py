"""Pool templates and per-category budget policies.

A template is the ordered set of budget line items offered for a kind of
goal (flights and hotels for a trip, venue and catering for a wedding).
How a category's line items turn into a goal total - whether the sum is
per person, which tips to show, which computed insight applies - is a
:class:`CategoryPolicy` looked up by category, so adding a category only
means adding catalog data.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .catalogs import load_config
from .config import CENTS_PER_UNIT

INSIGHT_KINDS = frozenset({
    'per_person_share',
    'per_guest_cost',
    'down_payment',
    'emergency_coverage',
})


class TemplateCategory(str, Enum):
    TRAVEL = 'travel'
    HOME = 'home'
    CAR = 'car'
    WEDDING = 'wedding'
    EDUCATION = 'education'
    TECHNOLOGY = 'technology'
    EMERGENCY = 'emergency'
    OTHER = 'other'


class FieldType(str, Enum):
    TEXT = 'text'
    NUMBER = 'number'
    CURRENCY = 'currency'
    DATE = 'date'


@dataclass(frozen=True)
class TemplateField:
    id: str
    name: str
    field_type: FieldType
    placeholder: str = ''
    required: bool = False

    @property
    def is_currency(self) -> bool:
        return self.field_type is FieldType.CURRENCY


@dataclass(frozen=True)
class PoolTemplate:
    """A category-specific set of budget line items.

    ``suggested_amounts`` are preset goal totals in cents.
    """

    id: str
    name: str
    category: TemplateCategory
    fields: Tuple[TemplateField, ...]
    suggested_amounts: Tuple[int, ...] = ()
    description: str = ''
    show_location: bool = False

    @property
    def currency_fields(self) -> Tuple[TemplateField, ...]:
        return tuple(field for field in self.fields if field.is_currency)

    def field(self, field_id: str) -> Optional[TemplateField]:
        return next((field for field in self.fields if field.id == field_id), None)


@dataclass(frozen=True)
class CategoryPolicy:
    """How a category turns its line items into a goal total."""

    category: TemplateCategory
    display_name: str
    per_person: bool = False
    tips: Tuple[str, ...] = ()
    insight: Optional[str] = None
    insight_overrides_total: bool = False
    fallback_suggestion_index: Optional[int] = None


@dataclass(frozen=True)
class TemplateCatalog:
    templates: Tuple[PoolTemplate, ...]
    policies: Mapping[TemplateCategory, CategoryPolicy]

    def policy_for(self, category: TemplateCategory) -> CategoryPolicy:
        policy = self.policies.get(TemplateCategory(category))
        if policy is None:
            return CategoryPolicy(category=TemplateCategory(category), display_name=str(category).title())
        return policy


def _field_from_config(entry: Dict[str, Any]) -> TemplateField:
    return TemplateField(
        id=entry['id'],
        name=entry.get('name', entry['id']),
        field_type=FieldType(entry.get('type', 'text')),
        placeholder=str(entry.get('placeholder', '')),
        required=bool(entry.get('required', False)),
    )


def _template_from_config(entry: Dict[str, Any]) -> PoolTemplate:
    return PoolTemplate(
        id=entry['id'],
        name=entry['name'],
        category=TemplateCategory(entry['category']),
        fields=tuple(_field_from_config(field) for field in entry.get('fields', [])),
        suggested_amounts=tuple(int(amount) * CENTS_PER_UNIT for amount in entry.get('suggested_amounts', [])),
        description=entry.get('description', ''),
        show_location=bool(entry.get('show_location', False)),
    )


def _policy_from_config(entry: Dict[str, Any]) -> CategoryPolicy:
    insight = entry.get('insight')
    if insight is not None and insight not in INSIGHT_KINDS:
        raise ValueError(f"Unknown insight '{insight}' for category '{entry['key']}'")
    return CategoryPolicy(
        category=TemplateCategory(entry['key']),
        display_name=entry.get('name', entry['key'].title()),
        per_person=bool(entry.get('per_person', False)),
        tips=tuple(entry.get('tips', [])),
        insight=insight,
        insight_overrides_total=bool(entry.get('insight_overrides_total', False)),
        fallback_suggestion_index=entry.get('fallback_suggestion_index'),
    )


def build_template_catalog(config: Dict[str, Any]) -> TemplateCatalog:
    """Build an immutable :class:`TemplateCatalog` from parsed catalog JSON.

    Raises:
        ValueError: On duplicate template ids, unknown categories, field
            types or insights.
    """
    templates = tuple(_template_from_config(entry) for entry in config.get('templates', []))
    seen = set()
    for template in templates:
        if template.id in seen:
            raise ValueError(f"Duplicate template id '{template.id}'")
        seen.add(template.id)

    policies = {}
    for entry in config.get('categories', []):
        policy = _policy_from_config(entry)
        policies[policy.category] = policy
    return TemplateCatalog(templates=templates, policies=MappingProxyType(policies))


def load_template_catalog(directory: Optional[Path] = None) -> TemplateCatalog:
    return build_template_catalog(load_config('templates', directory))


@lru_cache(maxsize=1)
def default_template_catalog() -> TemplateCatalog:
    """The shipped template catalog, loaded once."""
    return load_template_catalog()


def all_templates(catalog: Optional[TemplateCatalog] = None) -> List[PoolTemplate]:
    return list((catalog or default_template_catalog()).templates)


def templates_by_category(
    category: TemplateCategory, catalog: Optional[TemplateCatalog] = None
) -> List[PoolTemplate]:
    category = TemplateCategory(category)
    return [template for template in all_templates(catalog) if template.category is category]


def template_by_id(template_id: str, catalog: Optional[TemplateCatalog] = None) -> Optional[PoolTemplate]:
    return next((template for template in all_templates(catalog) if template.id == template_id), None)


def categories(catalog: Optional[TemplateCatalog] = None) -> List[Dict[str, str]]:
    """Category keys with display names, in catalog order."""
    catalog = catalog or default_template_catalog()
    return [
        {'key': policy.category.value, 'name': policy.display_name}
        for policy in catalog.policies.values()
    ]
