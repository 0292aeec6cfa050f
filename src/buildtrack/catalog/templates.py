"""Static trade and project templates used to pre-fill schedules.

The catalog is reference data: defined once at import, validated once, and only
ever read through the lookup functions below.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType

from src.buildtrack.core.exceptions import CatalogError
from src.buildtrack.models.enums import TradeCategory


@dataclass(frozen=True)
class TradeTemplate:
    """A typical trade with its phase, default duration and category."""

    id: str
    name: str
    icon: str
    phase: str
    typical_duration_days: int
    category: TradeCategory
    description: str


@dataclass(frozen=True)
class ProjectTemplate:
    """An ordered bundle of trade templates."""

    id: str
    name: str
    icon: str
    description: str
    trade_ids: tuple[str, ...]


PHASE_EARTHWORKS = "Erdarbeiten"
PHASE_SHELL = "Rohbau"
PHASE_INTERIOR = "Innenausbau"
PHASE_FINISHING = "Fertigstellung"

# Scheduling order of phases
PHASES: tuple[str, ...] = (PHASE_EARTHWORKS, PHASE_SHELL, PHASE_INTERIOR, PHASE_FINISHING)

CATEGORY_LABELS: Mapping[TradeCategory, str] = MappingProxyType(
    {
        TradeCategory.FOUNDATION: "Erdarbeiten & Fundament",
        TradeCategory.STRUCTURE: "Rohbau",
        TradeCategory.INTERIOR: "Innenausbau",
        TradeCategory.FINISHING: "Fertigstellung",
        TradeCategory.EXTERIOR: "Außenbereich",
    }
)

TRADE_TEMPLATES: tuple[TradeTemplate, ...] = (
    # Foundation & earthwork
    TradeTemplate(
        "erdarbeiten", "Erdarbeiten", "⛏️", PHASE_EARTHWORKS, 14,
        TradeCategory.FOUNDATION, "Aushub, Baugrube, Erdtransport",
    ),
    TradeTemplate(
        "fundament", "Fundament & Bodenplatte", "🧱", PHASE_EARTHWORKS, 10,
        TradeCategory.FOUNDATION, "Streifenfundament oder Bodenplatte",
    ),
    TradeTemplate(
        "kanalisation", "Kanalisation", "🚰", PHASE_EARTHWORKS, 7,
        TradeCategory.FOUNDATION, "Entwässerung, Abwasseranschlüsse",
    ),
    # Structure
    TradeTemplate(
        "rohbau", "Rohbau / Maurer", "🏗️", PHASE_SHELL, 42,
        TradeCategory.STRUCTURE, "Mauerwerk, Betonarbeiten",
    ),
    TradeTemplate(
        "zimmermann", "Zimmermann / Dachstuhl", "🪚", PHASE_SHELL, 14,
        TradeCategory.STRUCTURE, "Dachstuhl, Holzkonstruktion",
    ),
    TradeTemplate(
        "dachdecker", "Dachdecker", "🏠", PHASE_SHELL, 14,
        TradeCategory.STRUCTURE, "Dacheindeckung, Dachrinnen",
    ),
    TradeTemplate(
        "spengler", "Spengler / Klempner", "🔩", PHASE_SHELL, 5,
        TradeCategory.STRUCTURE, "Blecharbeiten, Verwahrungen",
    ),
    # Interior installation
    TradeTemplate(
        "fenster", "Fenster & Türen", "🪟", PHASE_INTERIOR, 7,
        TradeCategory.INTERIOR, "Fenstereinbau, Haustür, Innentüren",
    ),
    TradeTemplate(
        "elektro", "Elektroinstallation", "⚡", PHASE_INTERIOR, 21,
        TradeCategory.INTERIOR, "Leitungen, Verteilung, Schalter, Steckdosen",
    ),
    TradeTemplate(
        "sanitaer", "Sanitärinstallation", "🚿", PHASE_INTERIOR, 21,
        TradeCategory.INTERIOR, "Wasserleitungen, Abwasser, Armaturen",
    ),
    TradeTemplate(
        "heizung", "Heizung", "🔥", PHASE_INTERIOR, 14,
        TradeCategory.INTERIOR, "Heizungsanlage, Fußbodenheizung, Heizkörper",
    ),
    TradeTemplate(
        "lueftung", "Lüftung / Klima", "💨", PHASE_INTERIOR, 7,
        TradeCategory.INTERIOR, "Kontrollierte Wohnraumlüftung",
    ),
    # Interior finishing
    TradeTemplate(
        "trockenbau", "Trockenbau", "📐", PHASE_INTERIOR, 21,
        TradeCategory.INTERIOR, "Gipskarton, Decken, Vorwände",
    ),
    TradeTemplate(
        "estrich", "Estrich", "🪣", PHASE_INTERIOR, 7,
        TradeCategory.INTERIOR, "Zementestrich, Anhydrit, Trockenzeit",
    ),
    TradeTemplate(
        "innenputz", "Innenputz", "🪠", PHASE_INTERIOR, 14,
        TradeCategory.INTERIOR, "Gipsputz, Kalkputz",
    ),
    # Finishing
    TradeTemplate(
        "fliesen", "Fliesenleger", "🔲", PHASE_FINISHING, 14,
        TradeCategory.FINISHING, "Bad, Küche, Flur",
    ),
    TradeTemplate(
        "maler", "Maler & Lackierer", "🎨", PHASE_FINISHING, 14,
        TradeCategory.FINISHING, "Tapezieren, Streichen, Lackieren",
    ),
    TradeTemplate(
        "boden", "Bodenbeläge", "🪵", PHASE_FINISHING, 7,
        TradeCategory.FINISHING, "Parkett, Laminat, Vinyl",
    ),
    TradeTemplate(
        "schreiner", "Schreiner / Tischler", "🪑", PHASE_FINISHING, 10,
        TradeCategory.FINISHING, "Einbauschränke, Treppen, Küche",
    ),
    # Exterior
    TradeTemplate(
        "fassade", "Fassade / WDVS", "🧱", PHASE_FINISHING, 21,
        TradeCategory.EXTERIOR, "Außenputz, Wärmedämmung",
    ),
    TradeTemplate(
        "aussenanlagen", "Außenanlagen", "🌳", PHASE_FINISHING, 14,
        TradeCategory.EXTERIOR, "Terrasse, Zufahrt, Garten",
    ),
    TradeTemplate(
        "garage", "Garage / Carport", "🚗", PHASE_FINISHING, 14,
        TradeCategory.EXTERIOR, "Garagenbau, Carport",
    ),
)

PROJECT_TEMPLATES: tuple[ProjectTemplate, ...] = (
    ProjectTemplate(
        id="neubau_efh",
        name="Neubau EFH",
        icon="🏡",
        description="Einfamilienhaus Neubau mit allen Gewerken",
        trade_ids=(
            "erdarbeiten", "fundament", "kanalisation",
            "rohbau", "zimmermann", "dachdecker",
            "fenster", "elektro", "sanitaer", "heizung",
            "trockenbau", "estrich", "innenputz",
            "fliesen", "maler", "boden", "schreiner",
            "fassade", "aussenanlagen",
        ),
    ),
    ProjectTemplate(
        id="sanierung",
        name="Sanierung",
        icon="🔧",
        description="Kernsanierung Bestandsimmobilie",
        trade_ids=(
            "elektro", "sanitaer", "heizung",
            "fenster", "trockenbau", "estrich",
            "fliesen", "maler", "boden",
        ),
    ),
    ProjectTemplate(
        id="anbau",
        name="Anbau / Erweiterung",
        icon="➕",
        description="Erweiterung mit Rohbau",
        trade_ids=(
            "erdarbeiten", "fundament",
            "rohbau", "dachdecker",
            "fenster", "elektro", "sanitaer",
            "trockenbau", "estrich",
            "fliesen", "maler", "boden",
        ),
    ),
    ProjectTemplate(
        id="dachausbau",
        name="Dachausbau",
        icon="🏠",
        description="Ausbau Dachgeschoss",
        trade_ids=(
            "zimmermann", "dachdecker",
            "fenster", "elektro", "heizung",
            "trockenbau",
            "maler", "boden",
        ),
    ),
    ProjectTemplate(
        id="baeder",
        name="Badsanierung",
        icon="🚿",
        description="Komplettsanierung Badezimmer",
        trade_ids=("sanitaer", "elektro", "fliesen", "maler"),
    ),
)


def validate_catalog(
    trade_templates: tuple[TradeTemplate, ...],
    project_templates: tuple[ProjectTemplate, ...],
) -> None:
    """Check catalog integrity.

    Raises:
        CatalogError: On duplicate ids, non-positive durations, or project
            templates referencing unknown trade templates.
    """
    trade_ids = [t.id for t in trade_templates]
    if len(set(trade_ids)) != len(trade_ids):
        raise CatalogError("Duplicate trade template id in catalog")

    project_ids = [p.id for p in project_templates]
    if len(set(project_ids)) != len(project_ids):
        raise CatalogError("Duplicate project template id in catalog")

    for template in trade_templates:
        if template.typical_duration_days <= 0:
            raise CatalogError(
                f"Trade template '{template.id}' must have a positive duration"
            )

    known = set(trade_ids)
    for project_template in project_templates:
        missing = [tid for tid in project_template.trade_ids if tid not in known]
        if missing:
            raise CatalogError(
                f"Project template '{project_template.id}' references unknown trades: "
                f"{', '.join(missing)}"
            )


@lru_cache(maxsize=1)
def _trade_index() -> Mapping[str, TradeTemplate]:
    return MappingProxyType({t.id: t for t in TRADE_TEMPLATES})


@lru_cache(maxsize=1)
def _project_index() -> Mapping[str, ProjectTemplate]:
    return MappingProxyType({p.id: p for p in PROJECT_TEMPLATES})


def template_by_id(template_id: str) -> TradeTemplate | None:
    """Get a trade template by id, or None if unknown."""
    return _trade_index().get(template_id)


def project_template_by_id(template_id: str) -> ProjectTemplate | None:
    """Get a project template by id, or None if unknown."""
    return _project_index().get(template_id)


def templates_for_project(template_id: str) -> list[TradeTemplate]:
    """Resolve a project template into its trade templates, in template order.

    An unknown project template id yields an empty list.
    """
    project_template = project_template_by_id(template_id)
    if project_template is None:
        return []
    index = _trade_index()
    return [index[tid] for tid in project_template.trade_ids if tid in index]


def templates_by_category() -> dict[TradeCategory, list[TradeTemplate]]:
    """Group all trade templates by category.

    Every category is present (possibly empty) and every template lands in
    exactly one bucket, in catalog order.
    """
    grouped: dict[TradeCategory, list[TradeTemplate]] = {category: [] for category in TradeCategory}
    for template in TRADE_TEMPLATES:
        grouped[template.category].append(template)
    return grouped


def category_label(category: TradeCategory) -> str:
    """Display label of a category."""
    return CATEGORY_LABELS[category]


validate_catalog(TRADE_TEMPLATES, PROJECT_TEMPLATES)
