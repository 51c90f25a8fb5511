"""Translation of the embedded JSON-LD payload."""

import json
from typing import Optional

from static_i18n.core.markers import iter_tags

JSON_LD_TYPE = "application/ld+json"


def _find_payload(html: str) -> Optional[tuple[int, int]]:
    """Span of the body of the first JSON-LD script element."""
    opening = None
    for tag in iter_tags(html):
        if tag.name != "script":
            continue
        if opening is None:
            if tag.closing:
                continue
            script_type = tag.get("type")
            if script_type is not None and (script_type.value or "").strip().lower() == JSON_LD_TYPE:
                opening = tag
        elif tag.closing:
            return opening.end, tag.start
    return None


def translate_payload(data: dict, translations: dict[str, str]) -> bool:
    """Overlay translated fields onto a parsed payload. Returns True if anything changed."""
    changed = False

    if translations.get("schema.jobTitle"):
        data["jobTitle"] = translations["schema.jobTitle"]
        changed = True

    if translations.get("schema.description"):
        data["description"] = translations["schema.description"]
        changed = True

    if translations.get("schema.worksFor") and isinstance(data.get("worksFor"), dict):
        data["worksFor"]["name"] = translations["schema.worksFor"]
        changed = True

    return changed


def update_structured_data(html: str, translations: dict[str, str]) -> str:
    """
    Translate jobTitle, description and worksFor.name of the JSON-LD payload.

    A payload that fails to parse, or that no translation applies to, is
    left exactly as authored.
    """
    span = _find_payload(html)
    if span is None:
        return html

    start, end = span
    try:
        data = json.loads(html[start:end])
    except json.JSONDecodeError:
        return html

    if not isinstance(data, dict) or not translate_payload(data, translations):
        return html

    serialized = json.dumps(data, indent=6, ensure_ascii=False).replace("</", "<\\/")
    body = "\n    " + serialized.replace("\n", "\n    ") + "\n    "
    return html[:start] + body + html[end:]
