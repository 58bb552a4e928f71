"""
Folium map adapter - draws comment markers on Mapbox street tiles.

The adapter keeps its own marker registry and builds a fresh folium.Map
on every render(), so markers can be removed without touching folium's
internal element tree.
"""

from html import escape
from itertools import count
from typing import Dict, List, Optional, Tuple
import logging

import folium

from app.ui.map_view import MapAdapter
from app.ui.markers import MarkerSpec

logger = logging.getLogger(__name__)


MAPBOX_TILE_URL = "https://api.mapbox.com/styles/v1/mapbox/streets-v12/tiles/{z}/{x}/{y}?access_token=%s"
MAPBOX_ATTRIBUTION = "© Mapbox © OpenStreetMap"

# Continental US
DEFAULT_CENTER: Tuple[float, float] = (39.8283, -98.5795)
DEFAULT_ZOOM = 4

MARKER_CSS = """
<style>
  .civic-marker div { width: 28px; height: 28px; border-radius: 50%; border: 2px solid #fff;
    color: #fff; font: 600 13px/24px sans-serif; text-align: center; cursor: pointer;
    background: var(--marker-color); box-shadow: 0 1px 4px rgba(0,0,0,.4); }
  .civic-marker-pending div { width: 28px; height: 28px; border-radius: 50%; border: 2px dashed #1f2937;
    color: #1f2937; background: #fff; font: 700 14px/24px sans-serif; text-align: center; }
</style>
"""


class FoliumMapAdapter(MapAdapter):
    """MapAdapter backed by folium."""

    def __init__(self, token: str, center: Tuple[float, float] = DEFAULT_CENTER, zoom: int = DEFAULT_ZOOM):
        self.token = token
        self.center = center
        self.zoom = zoom
        self._ids = count(1)
        self._markers: Dict[str, MarkerSpec] = {}
        self._pending: Dict[str, Tuple[float, float]] = {}
        self.focused_handle: Optional[str] = None
        self.removed = False

    def add_marker(self, spec: MarkerSpec) -> str:
        handle = f"marker-{next(self._ids)}"
        self._markers[handle] = spec
        return handle

    def add_pending_marker(self, lat: float, lng: float) -> str:
        handle = f"pending-{next(self._ids)}"
        self._pending[handle] = (lat, lng)
        return handle

    def remove_marker(self, handle: str) -> None:
        self._markers.pop(handle, None)
        self._pending.pop(handle, None)
        if self.focused_handle == handle:
            self.focused_handle = None

    def focus_marker(self, handle: str) -> None:
        if handle in self._markers:
            self.focused_handle = handle

    def remove(self) -> None:
        self._markers.clear()
        self._pending.clear()
        self.focused_handle = None
        self.removed = True

    def marker_specs(self) -> List[MarkerSpec]:
        return list(self._markers.values())

    def pending_locations(self) -> List[Tuple[float, float]]:
        return list(self._pending.values())

    def build_map(self) -> folium.Map:
        fmap = folium.Map(location=list(self.center), zoom_start=self.zoom, tiles=None, control_scale=True)
        folium.TileLayer(
            tiles=MAPBOX_TILE_URL % self.token,
            attr=MAPBOX_ATTRIBUTION,
            name="Mapbox Streets",
            tile_size=512,
            zoom_offset=-1,
        ).add_to(fmap)
        fmap.get_root().header.add_child(folium.Element(MARKER_CSS))

        layer = folium.FeatureGroup(name="Comments", show=True)
        for handle, spec in self._markers.items():
            label = escape(spec.label)
            icon = folium.DivIcon(
                html=(
                    f'<div role="button" aria-label="{label}" title="{label}" '
                    f'style="--marker-color: {spec.color}">{escape(spec.initial)}</div>'
                ),
                class_name="civic-marker",
                icon_size=(28, 28),
                icon_anchor=(14, 14),
            )
            popup = folium.Popup(label, max_width=300, show=(handle == self.focused_handle))
            folium.Marker(
                location=[spec.latitude, spec.longitude],
                icon=icon,
                tooltip=label,
                popup=popup,
            ).add_to(layer)
        layer.add_to(fmap)

        for lat, lng in self._pending.values():
            folium.Marker(
                location=[lat, lng],
                icon=folium.DivIcon(
                    html='<div aria-hidden="true">?</div>',
                    class_name="civic-marker-pending",
                    icon_size=(28, 28),
                    icon_anchor=(14, 14),
                ),
            ).add_to(fmap)

        return fmap

    def render(self) -> str:
        """Full HTML document for the current map state."""
        return self.build_map().get_root().render()


def create_map_adapter(token: Optional[str]) -> Optional[FoliumMapAdapter]:
    """
    Build the map adapter, or None when no Mapbox token is configured.

    A missing token disables the map only; the rest of the app keeps working.
    """
    if not token or not token.strip():
        logger.error("[Map] Missing MAPBOX_TOKEN, map rendering disabled")
        return None
    return FoliumMapAdapter(token.strip())
