"""
HTML/JSON content negotiation for browser-facing responses.
"""
import html
from typing import Any, Dict, Mapping

from fastapi import Request
from fastapi.responses import HTMLResponse


def _quality(media_range: str) -> float:
    for param in media_range.split(";")[1:]:
        name, _, value = param.strip().partition("=")
        if name == "q":
            try:
                return float(value)
            except ValueError:
                return 0.0
    return 1.0


def wants_html(request: Request) -> bool:
    """True when the Accept header ranks text/html above application/json."""
    accept = request.headers.get("accept", "")
    if not accept:
        return False

    html_q = 0.0
    json_q = 0.0
    for media_range in accept.split(","):
        media_type = media_range.split(";")[0].strip().lower()
        q = _quality(media_range)
        if media_type == "text/html":
            html_q = max(html_q, q)
        elif media_type in ("application/json", "*/*"):
            json_q = max(json_q, q)
    return html_q > 0 and html_q > json_q


def _render_value(value: Any) -> str:
    if isinstance(value, Mapping):
        return _render_table(value)
    return html.escape(str(value))


def _render_table(data: Mapping[str, Any]) -> str:
    rows = "".join(
        f"<tr><th>{html.escape(str(k))}</th><td>{_render_value(v)}</td></tr>"
        for k, v in data.items()
    )
    return f"<table>{rows}</table>"


def render_html(title: str, data: Dict[str, Any], status_code: int = 200) -> HTMLResponse:
    """Render a mapping as a minimal HTML page."""
    safe_title = html.escape(title)
    body = (
        "<!DOCTYPE html>"
        f"<html><head><meta charset=\"utf-8\"><title>{safe_title}</title></head>"
        f"<body><h1>{safe_title}</h1>{_render_table(data)}</body></html>"
    )
    return HTMLResponse(content=body, status_code=status_code)
