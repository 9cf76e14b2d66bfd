"""Top-level package for the Pool Up savings engine.

The engine holds the calculations shared by the savings screens:

* ``scheduler`` - how much each contributor saves per month to hit a goal
* ``budget`` / ``templates`` - turning template line items into a goal total
* ``achievements`` - badge catalog evaluation and progress
* ``formatting`` / ``visualization`` - display helpers for the results

Everything here is pure and synchronous; money is integer cents.
"""

from .achievements import (
    Achievement,
    AchievementCatalog,
    AchievementEngine,
    AchievementProgress,
    AchievementStatus,
    ActivityCounters,
    Rarity,
    RequirementType,
    default_achievement_catalog,
)
from .budget import BudgetInsight, BudgetLine, BudgetSummary, aggregate
from .errors import InvalidInput, UnparsableDate
from .formatting import format_cents, format_requirement
from .parsing import parse_currency_input, parse_date
from .scheduler import ContributionPlan, GoalSpec, compute_plan, projection_frame
from .templates import (
    CategoryPolicy,
    PoolTemplate,
    TemplateCategory,
    TemplateField,
    default_template_catalog,
    template_by_id,
)

__all__ = [
    # Scheduler
    'GoalSpec',
    'ContributionPlan',
    'compute_plan',
    'projection_frame',
    # Budgets
    'TemplateCategory',
    'TemplateField',
    'PoolTemplate',
    'CategoryPolicy',
    'default_template_catalog',
    'template_by_id',
    'BudgetLine',
    'BudgetInsight',
    'BudgetSummary',
    'aggregate',
    # Achievements
    'Rarity',
    'RequirementType',
    'Achievement',
    'ActivityCounters',
    'AchievementProgress',
    'AchievementStatus',
    'AchievementCatalog',
    'AchievementEngine',
    'default_achievement_catalog',
    # Shared
    'InvalidInput',
    'UnparsableDate',
    'parse_currency_input',
    'parse_date',
    'format_cents',
    'format_requirement',
]
