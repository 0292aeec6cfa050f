"""Tests for the three schedule placement rules."""

from datetime import date, timedelta

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from src.buildtrack.catalog import (
    PHASES,
    TRADE_TEMPLATES,
    ProjectTemplate,
    TradeTemplate,
    project_template_by_id,
    templates_for_project,
)
from src.buildtrack.models.enums import Role, TradeCategory
from src.buildtrack.services import scheduling
from src.buildtrack.services.project_tree import shape_project
from src.buildtrack.services.scheduling import (
    calculate_trade_dates,
    chain_bulk_import,
    propose_quick_add,
    quick_add_anchor,
)
from tests.factories import ProjectFactory, TradeFactory

pytestmark = pytest.mark.unit


def _template(id: str, days: int, phase: str = PHASES[0]) -> TradeTemplate:
    return TradeTemplate(
        id=id,
        name=id.title(),
        icon="🔧",
        phase=phase,
        typical_duration_days=days,
        category=TradeCategory.INTERIOR,
        description="",
    )


class TestBulkImportChaining:
    def test_three_trades_back_to_back(self, monkeypatch: pytest.MonkeyPatch):
        custom = {t.id: t for t in (_template("a", 5), _template("b", 7), _template("c", 3))}
        monkeypatch.setattr(scheduling, "template_by_id", custom.get)
        project_template = ProjectTemplate(
            id="custom", name="Custom", icon="🏗️", description="", trade_ids=("a", "b", "c")
        )

        schedule = chain_bulk_import(project_template, date(2026, 1, 1))

        assert [(s.start_date, s.end_date) for s in schedule] == [
            (date(2026, 1, 1), date(2026, 1, 6)),
            (date(2026, 1, 7), date(2026, 1, 14)),
            (date(2026, 1, 15), date(2026, 1, 18)),
        ]

    def test_unknown_trade_ids_skipped(self, monkeypatch: pytest.MonkeyPatch):
        custom = {"a": _template("a", 2)}
        monkeypatch.setattr(scheduling, "template_by_id", custom.get)
        project_template = ProjectTemplate(
            id="custom", name="Custom", icon="🏗️", description="", trade_ids=("x", "a")
        )

        schedule = chain_bulk_import(project_template, date(2026, 1, 1))

        assert [s.template.id for s in schedule] == ["a"]
        assert schedule[0].start_date == date(2026, 1, 1)

    @pytest.mark.parametrize("template_id", ["neubau_efh", "sanierung", "baeder"])
    def test_catalog_templates_never_overlap(self, template_id: str):
        schedule = chain_bulk_import(project_template_by_id(template_id), date(2026, 4, 1))

        assert len(schedule) == len(project_template_by_id(template_id).trade_ids)
        for previous, current in zip(schedule, schedule[1:], strict=False):
            assert current.start_date == previous.end_date + timedelta(days=1)


class TestPhaseChaining:
    def test_empty_input(self):
        assert calculate_trade_dates([], date(2026, 1, 1)) == []

    def test_overlap_inside_phase(self):
        # 10 * 0.7 is 7.000000000000001 as a float, so the first step is 8 days
        templates = [_template("a", 10), _template("b", 5), _template("c", 3)]

        schedule = calculate_trade_dates(templates, date(2026, 1, 1))

        assert [s.start_date for s in schedule] == [
            date(2026, 1, 1),
            date(2026, 1, 9),
            date(2026, 1, 13),
        ]
        assert schedule[0].end_date == date(2026, 1, 11)

    def test_phases_run_in_fixed_order(self):
        templates = [
            _template("finish", 2, PHASES[3]),
            _template("dig", 4, PHASES[0]),
            _template("shell", 3, PHASES[1]),
        ]

        schedule = calculate_trade_dates(templates, date(2026, 1, 1))

        assert [s.template.id for s in schedule] == ["dig", "shell", "finish"]

    def test_unknown_phase_dropped(self):
        templates = [_template("a", 3), _template("odd", 3, "Sonstiges")]

        schedule = calculate_trade_dates(templates, date(2026, 1, 1))

        assert [s.template.id for s in schedule] == ["a"]

    def test_start_date_untouched(self):
        start = date(2026, 1, 1)

        calculate_trade_dates(templates_for_project("neubau_efh"), start)

        assert start == date(2026, 1, 1)

    @given(
        templates=st.lists(st.sampled_from(TRADE_TEMPLATES), min_size=1, max_size=15),
        start=st.dates(min_value=date(2000, 1, 1), max_value=date(2100, 1, 1)),
    )
    @settings(max_examples=100)
    def test_properties(self, templates: list[TradeTemplate], start: date):
        schedule = calculate_trade_dates(templates, start)

        assert len(schedule) == len(templates)
        assert all(s.end_date > s.start_date for s in schedule)
        assert all(s.start_date >= start for s in schedule)
        starts = [s.start_date for s in schedule]
        assert starts == sorted(starts)
        for phase in PHASES:
            in_phase = [s for s in schedule if s.template.phase == phase]
            for previous, current in zip(in_phase, in_phase[1:], strict=False):
                assert current.start_date >= previous.start_date


class TestQuickAdd:
    def test_anchor_on_project_start_without_trades(self):
        project = ProjectFactory.with_trades(start_date=date(2026, 5, 4))

        assert quick_add_anchor(shape_project(project, Role.ARCHITECT)) == date(2026, 5, 4)

    def test_anchor_on_end_of_last_trade_by_order(self):
        project = ProjectFactory.with_trades(
            TradeFactory.build(order=2, end_date=date(2026, 6, 30)),
            TradeFactory.build(order=0, end_date=date(2026, 9, 1)),
            start_date=date(2026, 5, 4),
        )

        assert quick_add_anchor(shape_project(project, Role.ARCHITECT)) == date(2026, 6, 30)

    def test_last_trade_without_end_date_falls_back_to_project_start(self):
        project = ProjectFactory.with_trades(
            TradeFactory.build(order=0, end_date=None),
            start_date=date(2026, 5, 4),
        )

        assert quick_add_anchor(shape_project(project, Role.ARCHITECT)) == date(2026, 5, 4)

    def test_proposal_spans_typical_duration(self):
        project = ProjectFactory.with_trades(
            TradeFactory.build(order=0, end_date=date(2026, 6, 30)),
        )

        proposal = propose_quick_add(shape_project(project, Role.ARCHITECT), _template("x", 14))

        assert proposal.start_date == date(2026, 6, 30)
        assert proposal.end_date == date(2026, 7, 14)
