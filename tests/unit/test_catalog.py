"""Tests for the template catalog."""

from dataclasses import replace

import pytest

from src.buildtrack.catalog import (
    PROJECT_TEMPLATES,
    TRADE_TEMPLATES,
    ProjectTemplate,
    category_label,
    project_template_by_id,
    template_by_id,
    templates_by_category,
    templates_for_project,
    validate_catalog,
)
from src.buildtrack.core.exceptions import CatalogError
from src.buildtrack.models.enums import TradeCategory

pytestmark = pytest.mark.unit


class TestCatalogIntegrity:
    def test_trade_template_ids_unique(self):
        ids = [t.id for t in TRADE_TEMPLATES]
        assert len(ids) == len(set(ids))

    def test_project_template_ids_unique(self):
        ids = [p.id for p in PROJECT_TEMPLATES]
        assert len(ids) == len(set(ids))

    def test_project_templates_reference_known_trades(self):
        for project_template in PROJECT_TEMPLATES:
            for trade_id in project_template.trade_ids:
                assert template_by_id(trade_id) is not None, (project_template.id, trade_id)

    def test_durations_positive(self):
        assert all(t.typical_duration_days > 0 for t in TRADE_TEMPLATES)

    def test_sizes(self):
        assert len(TRADE_TEMPLATES) == 22
        assert len(PROJECT_TEMPLATES) == 5


class TestValidateCatalog:
    def test_shipped_catalog_is_valid(self):
        validate_catalog(TRADE_TEMPLATES, PROJECT_TEMPLATES)

    def test_rejects_duplicate_trade_id(self):
        with pytest.raises(CatalogError, match="Duplicate trade template"):
            validate_catalog(TRADE_TEMPLATES + (TRADE_TEMPLATES[0],), PROJECT_TEMPLATES)

    def test_rejects_zero_duration(self):
        broken = replace(TRADE_TEMPLATES[0], typical_duration_days=0)
        with pytest.raises(CatalogError, match="positive duration"):
            validate_catalog((broken,) + TRADE_TEMPLATES[1:], PROJECT_TEMPLATES)

    def test_rejects_unknown_trade_reference(self):
        dangling = ProjectTemplate(
            id="pool", name="Pool", icon="🏊", description="", trade_ids=("schwimmbad",)
        )
        with pytest.raises(CatalogError, match="schwimmbad"):
            validate_catalog(TRADE_TEMPLATES, PROJECT_TEMPLATES + (dangling,))


class TestLookups:
    def test_template_by_id(self):
        template = template_by_id("elektro")
        assert template is not None
        assert template.name == "Elektroinstallation"
        assert template.category == TradeCategory.INTERIOR

    def test_template_by_unknown_id(self):
        assert template_by_id("nope") is None

    def test_project_template_by_id(self):
        assert project_template_by_id("baeder").name == "Badsanierung"
        assert project_template_by_id("nope") is None

    def test_templates_for_project_preserves_order(self):
        project_template = project_template_by_id("baeder")

        templates = templates_for_project("baeder")

        assert [t.id for t in templates] == list(project_template.trade_ids)

    @pytest.mark.parametrize("project_template", PROJECT_TEMPLATES, ids=lambda p: p.id)
    def test_templates_for_project_length(self, project_template):
        assert len(templates_for_project(project_template.id)) == len(project_template.trade_ids)

    def test_templates_for_unknown_project_is_empty(self):
        assert templates_for_project("unbekannt") == []


class TestTemplatesByCategory:
    def test_every_category_present(self):
        assert set(templates_by_category()) == set(TradeCategory)

    def test_partitions_catalog(self):
        grouped = templates_by_category()
        flattened = [t.id for templates in grouped.values() for t in templates]

        assert sorted(flattened) == sorted(t.id for t in TRADE_TEMPLATES)
        assert len(flattened) == len(set(flattened))

    def test_bucket_matches_category(self):
        for category, templates in templates_by_category().items():
            assert all(t.category == category for t in templates)

    def test_result_is_a_fresh_copy(self):
        templates_by_category()[TradeCategory.EXTERIOR].clear()
        assert templates_by_category()[TradeCategory.EXTERIOR]


def test_category_labels():
    assert category_label(TradeCategory.FOUNDATION) == "Erdarbeiten & Fundament"
    assert all(category_label(c) for c in TradeCategory)
