"""
Marker styling shared by the map and the comment modal.

Colour is never the only cue: every marker also carries the theme's
initial and a text label.
"""

from dataclasses import dataclass
from app.models.comment import Comment, Theme


THEME_COLOR = {
    Theme.TRANSPORTATION_SAFETY: "#3b82f6",
    Theme.GREEN_SPACE: "#22c55e",
    Theme.HOUSING: "#f97316",
    Theme.NOISE_AND_POLLUTION: "#eab308",
    Theme.PUBLIC_SAFETY: "#ef4444",
    Theme.COMMUNITY_SERVICES: "#a855f7",
    Theme.INFRASTRUCTURE: "#6b7280",
    Theme.OTHER: "#14b8a6",
}

THEME_INITIAL = {
    Theme.TRANSPORTATION_SAFETY: "T",
    Theme.GREEN_SPACE: "G",
    Theme.HOUSING: "H",
    Theme.NOISE_AND_POLLUTION: "N",
    Theme.PUBLIC_SAFETY: "P",
    Theme.COMMUNITY_SERVICES: "C",
    Theme.INFRASTRUCTURE: "I",
    Theme.OTHER: "O",
}

LABEL_TEXT_LIMIT = 80


def truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + "…"


def theme_color(theme: Theme) -> str:
    return THEME_COLOR.get(theme, THEME_COLOR[Theme.OTHER])


@dataclass(frozen=True)
class MarkerSpec:
    """Everything a map adapter needs to draw one comment marker."""
    comment_id: str
    latitude: float
    longitude: float
    color: str
    initial: str
    label: str


def build_marker_spec(comment: Comment) -> MarkerSpec:
    theme = comment.theme or Theme.OTHER
    return MarkerSpec(
        comment_id=comment.id,
        latitude=comment.latitude,
        longitude=comment.longitude,
        color=theme_color(theme),
        initial=THEME_INITIAL.get(theme, "O"),
        label=f"{theme.value}: {truncate(comment.comment_text, LABEL_TEXT_LIMIT)}",
    )
