"""Turn an API list response into per-part panels using the part registry."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Optional

from markupsafe import Markup

from .parts import PART_REGISTRY, RenderContext
from .url_parser import ParsedInput

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"
GOOD = "good"
BAD = "bad"


@dataclass
class PartPanel:
    """Display state of one part within a section."""

    name: str
    title: str
    status: str = UNKNOWN
    raw_json: Optional[str] = None
    markup: list = field(default_factory=list)
    message: Optional[str] = None


@dataclass
class SectionResult:
    """All part panels for one entity type."""

    entity_type: str
    panels: list[PartPanel]
    found: bool = False
    follow_ups: list[ParsedInput] = field(default_factory=list)


def skeleton_section(entity_type: str) -> SectionResult:
    """Every registry part as an unknown panel."""
    panels = [PartPanel(name=spec.name, title=spec.title) for spec in PART_REGISTRY[entity_type].values()]
    return SectionResult(entity_type=entity_type, panels=panels)


def _render_part(panel: PartPanel, entity_type: str, part_json, ctx: RenderContext) -> None:
    spec = PART_REGISTRY[entity_type][panel.name]
    panel.status = GOOD
    panel.raw_json = json.dumps(part_json, indent=4, ensure_ascii=False)
    try:
        panel.markup = spec.transform(part_json, ctx)
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        logger.warning("Could not interpret %s.%s: %s", entity_type, panel.name, e)
        panel.markup = [Markup("<p class='mb-15 bad'>Could not interpret this part: {}</p>").format(e)]


def render_section(entity_type: str, response: dict, ctx: RenderContext) -> SectionResult:
    """
    Fill a section from the first item of a list response.

    Parts present in the item are marked good, pretty-printed and transformed;
    missing parts are marked bad. An empty response leaves the skeleton untouched.
    """
    section = skeleton_section(entity_type)
    items = (response or {}).get("items") or []
    if not items:
        logger.warning("No %s found in response", entity_type)
        return section

    item = items[0]
    section.found = True
    for panel in section.panels:
        if panel.name in item:
            _render_part(panel, entity_type, item[panel.name], ctx)
            follow_up = PART_REGISTRY[entity_type][panel.name].follow_up
            if follow_up:
                parsed = follow_up(item[panel.name])
                if parsed:
                    section.follow_ups.append(parsed)
        else:
            panel.status = BAD
            panel.message = f"The {entity_type} does not have {panel.name}."
    return section
