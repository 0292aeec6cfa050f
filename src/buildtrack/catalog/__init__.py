"""Template catalog - read-only reference data."""

from src.buildtrack.catalog.templates import (
    PHASES,
    PROJECT_TEMPLATES,
    TRADE_TEMPLATES,
    ProjectTemplate,
    TradeTemplate,
    category_label,
    project_template_by_id,
    template_by_id,
    templates_by_category,
    templates_for_project,
    validate_catalog,
)

__all__ = [
    "PHASES",
    "PROJECT_TEMPLATES",
    "TRADE_TEMPLATES",
    "ProjectTemplate",
    "TradeTemplate",
    "category_label",
    "project_template_by_id",
    "template_by_id",
    "templates_by_category",
    "templates_for_project",
    "validate_catalog",
]
