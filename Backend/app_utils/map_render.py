"""
Leaflet maps rendered server side with folium.
Each function returns a complete HTML document.
"""

from html import escape

import folium

from app_utils.constants import NYC_CENTER, NEIGHBORHOOD_COORDINATES

SEVERITY_COLORS = {
    "critical": "#dc2626",
    "high": "#ea580c",
    "medium": "#ca8a04",
    "low": "#65a30d",
}

SEVERITY_RADIUS = {"critical": 12, "high": 10, "medium": 8, "low": 6}

LEGEND_HTML = """
<div style="position: fixed; bottom: 24px; left: 24px; z-index: 9999;
            background: white; padding: 8px 12px; border-radius: 8px;
            box-shadow: 0 2px 8px rgba(0,0,0,0.3); font-size: 13px;">
  <div><span style="color:#10b981;">&#9679;</span> 5+ orgs</div>
  <div><span style="color:#3b82f6;">&#9679;</span> 3-4 orgs</div>
  <div><span style="color:#f59e0b;">&#9679;</span> 1-2 orgs</div>
  <div><span style="color:#ef4444;">&#9679;</span> No coverage</div>
</div>
"""


def _base_map(zoom_start=10):
    return folium.Map(location=list(NYC_CENTER), zoom_start=zoom_start, tiles="OpenStreetMap")


def render_borough_heatmap(summary):
    """summary: output of coverage_service.borough_summary"""
    m = _base_map(zoom_start=10)

    for entry in summary:
        size = entry["size"]
        count = entry["count"]
        marker_html = (
            f'<div style="width:{size}px;height:{size}px;background-color:{entry["color"]};'
            f'border:3px solid white;border-radius:50%;display:flex;align-items:center;'
            f'justify-content:center;font-weight:bold;color:white;font-size:16px;'
            f'box-shadow:0 2px 8px rgba(0,0,0,0.3);">{count}</div>'
        )
        popup_html = (
            f'<h3 style="margin:0 0 8px 0;font-size:16px;">{escape(entry["borough"])}</h3>'
            f'<p style="margin:0;font-size:14px;">{count} organization{"" if count == 1 else "s"}</p>'
        )
        folium.Marker(
            location=[entry["latitude"], entry["longitude"]],
            popup=folium.Popup(popup_html, max_width=240),
            icon=folium.DivIcon(
                html=marker_html,
                icon_size=(size, size),
                icon_anchor=(size // 2, size // 2),
            ),
        ).add_to(m)

    m.get_root().html.add_child(folium.Element(LEGEND_HTML))
    return m.get_root().render()


def render_gap_map(gaps):
    """
    gaps: list of dicts with service_name, severity, status, borough,
    neighborhood, description, reported_by.
    Reports without known neighborhood coordinates are skipped.
    """
    m = _base_map(zoom_start=11)

    for gap in gaps:
        coords = NEIGHBORHOOD_COORDINATES.get(gap.get("neighborhood") or "")
        if not coords:
            continue

        severity = gap["severity"]
        popup_html = (
            f'<h4>{escape(gap["service_name"])}</h4>'
            f'<div><b>{escape(severity.upper())}</b> &middot; '
            f'{escape(gap["status"].replace("_", " ").upper())}</div>'
            f'<div><strong>{escape(gap["neighborhood"])}</strong>, {escape(gap["borough"])}</div>'
            f'<p>{escape(gap["description"])}</p>'
        )
        if gap.get("reported_by"):
            popup_html += f'<div>Reported by: {escape(gap["reported_by"])}</div>'

        folium.CircleMarker(
            location=list(coords),
            radius=SEVERITY_RADIUS.get(severity, 6),
            color="#fff",
            weight=2,
            opacity=1,
            fill=True,
            fill_color=SEVERITY_COLORS.get(severity, "#65a30d"),
            fill_opacity=0.7,
            popup=folium.Popup(popup_html, max_width=300),
        ).add_to(m)

    return m.get_root().render()


def render_organization_map(organizations):
    """Active organizations that have coordinates."""
    m = _base_map(zoom_start=11)

    for org in organizations:
        if org.latitude is None or org.longitude is None:
            continue
        popup_html = (
            f'<h4>{escape(org.name)}</h4>'
            f'<div>{escape(org.type.replace("_", " ").title())}</div>'
        )
        if org.neighborhood:
            popup_html += f'<div>{escape(org.neighborhood)}, {escape(org.borough)}</div>'

        folium.Marker(
            location=[org.latitude, org.longitude],
            popup=folium.Popup(popup_html, max_width=260),
            tooltip=org.name,
        ).add_to(m)

    return m.get_root().render()
