"""Route a classified input to the right API resource and render the response."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional
from urllib.parse import quote

from .parts import ENTITY_TYPES, RenderContext, part_names
from .renderer import SectionResult, render_section, skeleton_section
from .url_parser import CHANNEL_ID, CHANNEL_USER, PLAYLIST_ID, UNKNOWN, VIDEO_ID, ParsedInput
from .youtube_api import YouTubeApiError, YouTubeClient

logger = logging.getLogger(__name__)

THUMBNAIL_URL = "https://img.youtube.com/vi/{video_id}/{index}.jpg"
REVERSE_IMAGE_SEARCH_URL = "https://www.google.com/searchbyimage?image_url={url}"
THUMBNAIL_COUNT = 4

UNRECOGNIZED_INPUT = "Didn't recognize your input."


@dataclass(frozen=True)
class Route:
    """How an input type maps onto the API."""

    entity_type: str
    resource: str
    id_param: str
    hides: tuple[str, ...]


ROUTES: dict[str, Route] = {
    VIDEO_ID: Route("video", "videos", "id", hides=("playlist",)),
    CHANNEL_ID: Route("channel", "channels", "id", hides=("video", "playlist")),
    CHANNEL_USER: Route("channel", "channels", "forUsername", hides=("video", "playlist")),
    PLAYLIST_ID: Route("playlist", "playlists", "id", hides=("video",)),
}


@dataclass
class Thumbnail:
    index: int
    url: str
    search_url: str


@dataclass
class PageResult:
    """Everything the page needs to render one submission."""

    parsed: ParsedInput
    sections: dict[str, SectionResult]
    visible: set[str] = field(default_factory=lambda: set(ENTITY_TYPES))
    thumbnails: list[Thumbnail] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


def video_thumbnails(video_id: str) -> list[Thumbnail]:
    """The stock thumbnails YouTube generates for every video."""
    thumbs = []
    for i in range(THUMBNAIL_COUNT):
        url = THUMBNAIL_URL.format(video_id=video_id, index=i)
        thumbs.append(Thumbnail(index=i, url=url, search_url=REVERSE_IMAGE_SEARCH_URL.format(url=quote(url, safe=""))))
    return thumbs


def empty_result(parsed: Optional[ParsedInput] = None) -> PageResult:
    """All sections visible, every panel unknown."""
    return PageResult(
        parsed=parsed or ParsedInput(type=UNKNOWN),
        sections={entity: skeleton_section(entity) for entity in ENTITY_TYPES},
    )


class Dispatcher:
    """Issue one list request per submission (plus channel follow-ups) and render it."""

    def __init__(
        self,
        client: YouTubeClient,
        context_factory: Callable[[], RenderContext] = RenderContext,
    ):
        self.client = client
        self.context_factory = context_factory

    def submit(self, parsed: ParsedInput) -> PageResult:
        """Dispatch a classified input and return the rendered page state."""
        result = empty_result(parsed)
        logger.info("Submitted %s: %s", parsed.type, parsed.value)

        if not parsed.is_known:
            logger.info("Didn't recognize input: %r", parsed.original_input)
            result.errors.append(UNRECOGNIZED_INPUT)
            return result

        ctx = self.context_factory()
        follow_ups = self._fetch(parsed, ROUTES[parsed.type], result, ctx)
        for follow_up in follow_ups:
            follow_route = ROUTES.get(follow_up.type)
            if follow_route is not None:
                # Follow-ups never trigger further follow-ups
                self._fetch(follow_up, follow_route, result, ctx)
        return result

    def _fetch(self, parsed: ParsedInput, route: Route, result: PageResult, ctx: RenderContext) -> list[ParsedInput]:
        if parsed.may_hide_others:
            result.visible.difference_update(route.hides)

        logger.info("Grabbing %s via %s.%s=%s", route.entity_type, route.resource, route.id_param, parsed.value)
        try:
            response = self.client.list(
                route.resource,
                part=",".join(part_names(route.entity_type)),
                **{route.id_param: parsed.value},
            )
        except YouTubeApiError as e:
            logger.error("Fetching %s %s failed: %s", route.entity_type, parsed.value, e)
            result.errors.append(f"Could not load {route.entity_type} {parsed.value}: {e}")
            return []

        section = render_section(route.entity_type, response, ctx)
        result.sections[route.entity_type] = section
        if not section.found:
            result.errors.append(f"No {route.entity_type} found for {parsed.value}.")
            return []

        if route.entity_type == "video":
            result.thumbnails = video_thumbnails(parsed.value)
        return section.follow_ups
