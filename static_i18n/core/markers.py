"""Marker rewrite engine.

Authors annotate the HTML template with marker attributes naming a
translation key. Each marker kind is owned by one rewrite pass:

    <h1 data-i18n="hero.title">Hello</h1>
    <meta name="description" data-i18n-content="seo.description" content="...">
    <span data-i18n-data-text="hero.glitch" data-text="...">...</span>
    <button data-i18n-aria-label="nav.toggle" aria-label="...">
    <a href="/cv.pdf" data-i18n-href="links.cv">

Passes work on the raw text rather than a re-serialized DOM so that all
markup outside the replaced spans is kept byte for byte. A small tokenizer
finds start and end tags; every matcher reports the span it would replace
and each pass splices all of its replacements in one go, so a pass never
sees its own output.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from bs4 import BeautifulSoup


class MarkerKind(Enum):
    """The five marker kinds: (marker attribute, attribute it rewrites)."""

    TEXT = ("data-i18n", None)
    CONTENT = ("data-i18n-content", "content")
    DATA_TEXT = ("data-i18n-data-text", "data-text")
    ARIA_LABEL = ("data-i18n-aria-label", "aria-label")
    HREF = ("data-i18n-href", "href")

    def __init__(self, marker_attr: str, target_attr: Optional[str]):
        self.marker_attr = marker_attr
        self.target_attr = target_attr

    def escape(self, value: str) -> str:
        """Escape a translated value for insertion into this kind's target."""
        if self is MarkerKind.CONTENT:
            return value.replace("&", "&amp;").replace('"', "&quot;")
        if self in (MarkerKind.DATA_TEXT, MarkerKind.ARIA_LABEL):
            return value.replace('"', "&quot;")
        # Text is trusted markup, hrefs are already URL-safe
        return value


# Attribute passes first: the text pass replaces whole element bodies and
# must only ever see attribute values that are already final.
PASS_ORDER = (
    MarkerKind.CONTENT,
    MarkerKind.DATA_TEXT,
    MarkerKind.ARIA_LABEL,
    MarkerKind.HREF,
    MarkerKind.TEXT,
)

MARKER_ATTRIBUTES = frozenset(kind.marker_attr for kind in MarkerKind)

VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})

# Elements whose body is raw text and must not be scanned for tags
RAW_TEXT_ELEMENTS = frozenset({"script", "style"})


@dataclass(frozen=True)
class MarkerMatch:
    """One marker occurrence and the span of text its pass would replace."""
    kind: MarkerKind
    key: str
    span: tuple[int, int]


@dataclass(frozen=True)
class Attribute:
    """An attribute inside a start tag, with absolute offsets."""
    name: str
    value: Optional[str]
    quote: str
    start: int  # includes any leading whitespace
    end: int
    value_start: int
    value_end: int


@dataclass(frozen=True)
class Tag:
    """A start or end tag found by the tokenizer."""
    name: str
    start: int
    end: int
    closing: bool = False
    self_closing: bool = False
    attributes: tuple[Attribute, ...] = ()

    def get(self, name: str) -> Optional[Attribute]:
        """First attribute with the given (case-insensitive) name."""
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        return None


# As in browsers, an attribute may follow a quoted value without whitespace
# and unquoted values may contain '='.
_TAG_PATTERN = re.compile(
    r'(?P<comment><!--[\s\S]*?-->)'
    r'|<(?P<closing>/)?(?P<name>[a-zA-Z][a-zA-Z0-9:-]*)'
    r'(?P<attrs>(?:(?:\s+|(?<=["\']))[^\s"\'>/=]+'
    r'(?:\s*=\s*(?:"[^"]*"|\'[^\']*\'|[^\s"\'<>`]+))?)*)'
    r'\s*(?P<self_closing>/)?>'
)

_ATTR_PATTERN = re.compile(
    r'(?:\s+|(?<=["\']))(?P<name>[^\s"\'>/=]+)'
    r'(?:\s*=\s*(?:"(?P<dq>[^"]*)"|\'(?P<sq>[^\']*)\'|(?P<bare>[^\s"\'<>`]+)))?'
)


def _parse_attributes(attrs: str, offset: int) -> tuple[Attribute, ...]:
    attributes = []
    for match in _ATTR_PATTERN.finditer(attrs):
        for group, quote in (("dq", '"'), ("sq", "'"), ("bare", "")):
            if match.group(group) is not None:
                value = match.group(group)
                value_start = offset + match.start(group)
                value_end = offset + match.end(group)
                break
        else:
            value, quote = None, ""
            value_start = value_end = offset + match.end()

        attributes.append(Attribute(
            name=match.group("name").lower(),
            value=value,
            quote=quote,
            start=offset + match.start(),
            end=offset + match.end(),
            value_start=value_start,
            value_end=value_end,
        ))
    return tuple(attributes)


def iter_tags(html: str) -> Iterator[Tag]:
    """Yield start and end tags in document order.

    Comments are skipped, and so are the bodies of <script> and <style>.
    """
    pos = 0
    while True:
        match = _TAG_PATTERN.search(html, pos)
        if not match:
            return
        pos = match.end()

        if match.group("comment"):
            continue

        name = match.group("name").lower()

        if match.group("closing"):
            yield Tag(name=name, start=match.start(), end=match.end(), closing=True)
            continue

        yield Tag(
            name=name,
            start=match.start(),
            end=match.end(),
            self_closing=bool(match.group("self_closing")),
            attributes=_parse_attributes(match.group("attrs"), match.start("attrs")),
        )

        if name in RAW_TEXT_ELEMENTS:
            end_tag = re.compile(rf"</{name}\s*>", re.IGNORECASE).search(html, pos)
            if not end_tag:
                return
            yield Tag(name=name, start=end_tag.start(), end=end_tag.end(), closing=True)
            pos = end_tag.end()


def _find_closing(tags: list[Tag], index: int) -> Optional[Tag]:
    """Matching end tag for tags[index], counting nested same-name elements."""
    name = tags[index].name
    depth = 1
    for tag in tags[index + 1:]:
        if tag.name != name:
            continue
        if tag.closing:
            depth -= 1
            if depth == 0:
                return tag
        elif not tag.self_closing:
            depth += 1
    return None


def _match_text(tags: list[Tag]) -> list[MarkerMatch]:
    matches = []
    for index, tag in enumerate(tags):
        if tag.closing:
            continue
        marker = tag.get(MarkerKind.TEXT.marker_attr)
        if marker is None or not marker.value:
            continue
        if tag.self_closing or tag.name in VOID_ELEMENTS:
            continue

        closing = _find_closing(tags, index)
        if closing is None:
            continue
        matches.append(MarkerMatch(MarkerKind.TEXT, marker.value, (tag.end, closing.start)))
    return matches


def _match_attribute(tags: list[Tag], kind: MarkerKind) -> list[MarkerMatch]:
    matches = []
    for tag in tags:
        if tag.closing:
            continue
        marker = tag.get(kind.marker_attr)
        if marker is None or not marker.value:
            continue

        # Only double-quoted targets can take an escaped value safely
        target = tag.get(kind.target_attr)
        if target is None or target.quote != '"':
            continue
        matches.append(MarkerMatch(kind, marker.value, (target.value_start, target.value_end)))
    return matches


def match_markers(html: str, kind: MarkerKind) -> list[MarkerMatch]:
    """All occurrences of one marker kind, in document order."""
    tags = list(iter_tags(html))
    if kind is MarkerKind.TEXT:
        return _match_text(tags)
    return _match_attribute(tags, kind)


def _splice(html: str, replacements: list[tuple[tuple[int, int], str]]) -> str:
    """Replace non-overlapping spans; a span overlapping an earlier one is dropped."""
    pieces = []
    last_end = 0
    for (start, end), text in sorted(replacements, key=lambda r: r[0]):
        if start < last_end:
            continue
        pieces.append(html[last_end:start])
        pieces.append(text)
        last_end = end
    pieces.append(html[last_end:])
    return "".join(pieces)


def apply_pass(html: str, kind: MarkerKind, translations: dict[str, str]) -> str:
    """Run one rewrite pass. Markers whose key is missing are left untouched."""
    replacements = []
    for match in match_markers(html, kind):
        value = translations.get(match.key)
        if value is None:
            continue
        replacements.append((match.span, kind.escape(value)))

    if not replacements:
        return html
    return _splice(html, replacements)


def apply_markers(html: str, translations: dict[str, str]) -> str:
    """Run every rewrite pass in PASS_ORDER."""
    for kind in PASS_ORDER:
        html = apply_pass(html, kind, translations)
    return html


def strip_markers(html: str) -> str:
    """Remove every marker attribute (with its leading whitespace) from start tags."""
    spans = []
    for tag in iter_tags(html):
        if tag.closing:
            continue
        for attribute in tag.attributes:
            if attribute.name in MARKER_ATTRIBUTES:
                spans.append(((attribute.start, attribute.end), ""))

    if not spans:
        return html
    return _splice(html, spans)


def marker_keys(html: str) -> dict[MarkerKind, list[str]]:
    """
    List the distinct translation keys referenced by a template.

    Args:
        html: Template HTML

    Returns:
        Mapping of marker kind to its keys, in document order
    """
    soup = BeautifulSoup(html, "lxml")

    keys: dict[MarkerKind, list[str]] = {}
    for kind in MarkerKind:
        found: list[str] = []
        for element in soup.find_all(attrs={kind.marker_attr: True}):
            key = element.get(kind.marker_attr)
            if key and key not in found:
                found.append(key)
        keys[kind] = found
    return keys
