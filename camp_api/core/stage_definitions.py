"""Recruit pipeline stage definitions and ordering."""

from __future__ import annotations

from camp_api.db.enums import RecruitStage


# Board column colors
DEFAULT_COLORS = {
    RecruitStage.PROSPECT.value: "#64748B",  # Slate
    RecruitStage.CONTACTED.value: "#3B82F6",  # Blue
    RecruitStage.INTERESTED.value: "#A855F7",  # Purple
    RecruitStage.COMMITTED.value: "#EAB308",  # Yellow
    RecruitStage.REGISTERED.value: "#22C55E",  # Green
    RecruitStage.READY.value: "#34D399",  # Emerald
    RecruitStage.DECLINED.value: "#B91C1C",  # Red
}

DEFAULT_STAGE_ORDER = [
    RecruitStage.PROSPECT.value,
    RecruitStage.CONTACTED.value,
    RecruitStage.INTERESTED.value,
    RecruitStage.COMMITTED.value,
    RecruitStage.REGISTERED.value,
    RecruitStage.READY.value,
    RecruitStage.DECLINED.value,
]

TERMINAL_STAGES = {RecruitStage.DECLINED.value}


def get_default_stage_defs() -> list[dict[str, object]]:
    """Generate recruit pipeline stage definitions."""
    stages: list[dict[str, object]] = []
    for order, slug in enumerate(DEFAULT_STAGE_ORDER, start=1):
        stages.append(
            {
                "slug": slug,
                "label": slug.replace("_", " ").title(),
                "color": DEFAULT_COLORS.get(slug, "#6B7280"),
                "order": order,
                "is_terminal": slug in TERMINAL_STAGES,
            }
        )
    return stages


def adjacent_stages(stage: str) -> list[str]:
    """
    Stages the board offers as one-click moves: previous and next.

    Declined is offered separately from every non-declined stage and is
    never adjacent.
    """
    progression = [s for s in DEFAULT_STAGE_ORDER if s not in TERMINAL_STAGES]
    if stage not in progression:
        return []
    idx = progression.index(stage)
    neighbors = []
    if idx > 0:
        neighbors.append(progression[idx - 1])
    if idx < len(progression) - 1:
        neighbors.append(progression[idx + 1])
    return neighbors
