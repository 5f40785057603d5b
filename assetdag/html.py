# assetdag/html.py
"""
HTML tag formatting for rendered assets.
"""

from html import escape
from typing import Any, Dict, Mapping, Optional


def render_attrs(attrs: Mapping[str, Any]) -> str:
    """
    Render HTML attributes, or return '' if there is nothing to render.

    True renders a bare attribute; None and False are left out.
    """
    def parts():
        for key, value in attrs.items():
            if value is None or value is False:
                continue
            if value is True:
                yield escape(str(key))
                continue
            if isinstance(value, (dict, list, tuple)):
                raise TypeError(f"Attributes can't be of type {type(value).__name__}, you sent {value} for key {key}")
            yield f'{escape(str(key))}="{escape(str(value), quote=True)}"'

    rendered = " ".join(parts())
    return f" {rendered}" if rendered else ""


class HtmlBuilder:
    """Builds link and script tags."""

    STYLE_DEFAULTS: Dict[str, Any] = {
        "media": "all",
        "type": "text/css",
        "rel": "stylesheet",
    }

    def style(self, url: str, attributes: Optional[Mapping[str, Any]] = None) -> str:
        attrs = dict(self.STYLE_DEFAULTS)
        attrs.update(attributes or {})
        attrs["href"] = url
        return f"<link{render_attrs(attrs)}>"

    def script(self, url: str, attributes: Optional[Mapping[str, Any]] = None) -> str:
        attrs = dict(attributes or {})
        attrs["src"] = url
        return f"<script{render_attrs(attrs)}></script>"
