"""
Part registry: for each entity type, the API parts to request and how to present them.

Every transform takes the part's JSON and a RenderContext and returns a list of
markup fragments. All interpolated values go through Markup.format, which escapes
them.

Parts that cannot be requested with an API key are left out:
  video:    fileDetails, processingDetails, suggestions (owner only); player, id (useless)
  channel:  auditDetails (owner only); id (useless)
  playlist: player, id (useless)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from math import gcd
from typing import Any, Callable, Optional
from urllib.parse import quote

from markupsafe import Markup

from .durations import (
    format_duration,
    format_utc,
    from_now,
    get_duration,
    parse_iso_duration,
    parse_timestamp,
)
from .url_parser import CHANNEL_ID, ParsedInput

STATIC_MAP_URL = "https://maps.googleapis.com/maps/api/staticmap"
LONG_UPLOAD_MINUTES = 15


@dataclass
class RenderContext:
    """Inputs a transform needs beyond the part JSON."""

    now: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    maps_api_key: Optional[str] = None


Transform = Callable[[dict, RenderContext], list]
FollowUp = Callable[[dict], Optional[ParsedInput]]


@dataclass
class PartSpec:
    """One requestable API part."""

    name: str
    title: str
    transform: Transform
    follow_up: Optional[FollowUp] = None


# ── markup helpers ────────────────────────────────────────────────────────────

def _p(template: str, *args: Any) -> Markup:
    return Markup("<p class='mb-15'>" + template + "</p>").format(*args)


def _orange(value: Any) -> Markup:
    return Markup("<span class='orange'>{}</span>").format(value)


def _count(value: Any) -> str:
    """Thousands separators for API counts (which arrive as strings)."""
    try:
        return f"{int(value):,}"
    except (TypeError, ValueError):
        return str(value)


def _channel_link(channel_id: str, channel_title: str) -> Markup:
    return Markup("<a href='https://www.youtube.com/channel/{}' target='_blank'>{}</a>").format(
        channel_id, channel_title
    )


def _playlist_link(playlist_id: str, label: str) -> Markup:
    return _p("<a href='https://www.youtube.com/playlist?list={}'>{}</a>", playlist_id, label)


def _thumbnail(part: dict, css_class: str = "mb-15") -> list:
    url = (part.get("thumbnails") or {}).get("medium", {}).get("url")
    if not url:
        return []
    return [Markup("<img src='{}' class='{}'>").format(url, css_class)]


def _title(part: dict) -> Markup:
    return _p("<span style='font-size: 1.25em'>{}</span>", part.get("title", ""))


def _dated(label: str, timestamp: str, ctx: RenderContext) -> Markup:
    published = parse_timestamp(timestamp)
    return _p(
        "<strong>{}</strong> {} ({})",
        label,
        _orange(format_utc(published)),
        from_now(published, ctx.now),
    )


def _channel_follow_up(part: dict) -> Optional[ParsedInput]:
    channel_id = part.get("channelId")
    if not channel_id:
        return None
    return ParsedInput(type=CHANNEL_ID, value=channel_id, may_hide_others=False)


def _flag(part: dict, key: str, when_true: Markup, when_false: Markup) -> list:
    """One line for a boolean key, or nothing when the key is absent."""
    if key not in part:
        return []
    return [when_true if part[key] else when_false]


# ── shared transforms ─────────────────────────────────────────────────────────

def _no_markup(part: dict, ctx: RenderContext) -> list:
    return []


def _topic_details(part: dict, ctx: RenderContext) -> list:
    out = []
    for url in part.get("topicCategories") or []:
        text = url[url.rfind("/") + 1:].replace("_", " ")
        out.append(_p("<a href='{}' target='_blank'>{}</a>", url, text))
    return out


def _localizations(part: dict, ctx: RenderContext) -> list:
    if not part:
        return [_p("There are no localizations.")]
    locales = sorted(part)
    return [_p("Localized into {} language(s): {}", len(locales), _orange(", ".join(locales)))]


# ── video ─────────────────────────────────────────────────────────────────────

def _video_snippet(part: dict, ctx: RenderContext) -> list:
    out = _thumbnail(part)
    out.append(_title(part))
    out.append(
        _p("<strong>Published by</strong> {}", _channel_link(part.get("channelId", ""), part.get("channelTitle", "")))
    )
    if part.get("publishedAt"):
        out.append(_dated("Published on", part["publishedAt"], ctx))

    tags = part.get("tags")
    if tags:
        spans = Markup("").join(Markup("<span class='tag'>{}</span>").format(t) for t in tags)
        out.append(_p("<strong>Tag(s): </strong>{}", spans))
    else:
        out.append(_p("There were no tags."))
    return out


def normalize_like_ratio(likes: int, dislikes: int) -> tuple[int, int]:
    """
    Reduce likes:dislikes to "N per 1" (or "1 per N"), truncated.

    When either side is zero the raw counts are returned unchanged.
    """
    if likes <= 0 or dislikes <= 0:
        return likes, dislikes
    divisor = gcd(likes, dislikes)
    reduced_likes, reduced_dislikes = likes // divisor, dislikes // divisor
    if reduced_likes > reduced_dislikes:
        return reduced_likes // reduced_dislikes, 1
    return 1, reduced_dislikes // reduced_likes


def _video_statistics(part: dict, ctx: RenderContext) -> list:
    out = []
    if "likeCount" in part:
        likes = int(part["likeCount"])
        if "dislikeCount" in part:
            norm_likes, norm_dislikes = normalize_like_ratio(likes, int(part["dislikeCount"]))
            out.append(
                _p(
                    "<strong>Normalized like ratio:</strong> "
                    "<span style='color:green'>{} like(s)</span> per "
                    "<span style='color:red'>{} dislike(s)</span>",
                    _count(norm_likes),
                    _count(norm_dislikes),
                )
            )
        else:
            out.append(_p("<strong>Likes:</strong> {} (the dislike count is not public)", _count(likes)))
    else:
        out.append(_p("This video has <strong>likes disabled.</strong>"))

    if "viewCount" in part:
        out.append(_p("<strong>Views:</strong> {}", _count(part["viewCount"])))
    else:
        out.append(_p("This video has a <strong>disabled view count.</strong>"))

    if "commentCount" in part:
        out.append(_p("<strong>Comments:</strong> {}", _count(part["commentCount"])))
    else:
        out.append(_p("This video has <strong>comments disabled.</strong>"))
    return out


def _video_recording_details(part: dict, ctx: RenderContext) -> list:
    location = part.get("location") or {}
    lat, lng = location.get("latitude"), location.get("longitude")
    if not lat or not lng:
        return []

    latlng = f"{lat},{lng}"
    link = "https://maps.google.com/maps?q=loc:" + latlng
    if ctx.maps_api_key:
        static_map = (
            f"{STATIC_MAP_URL}?center={latlng}&zoom=13&size=1000x300"
            f"&key={quote(ctx.maps_api_key)}&markers=color:red|{latlng}"
        )
        return [
            Markup(
                "<a href='{}' target='_blank'>"
                "<img class='mb-15' src='{}' alt='Google Maps Static Map'>"
                "<p>Click to open in Google Maps</p>"
                "</a>"
            ).format(link, static_map)
        ]
    return [_p("<a href='{}' target='_blank'>Recorded at {}</a>", link, latlng)]


def _video_status(part: dict, ctx: RenderContext) -> list:
    out = []
    if part.get("privacyStatus"):
        out.append(_p("Privacy status: {}", _orange(part["privacyStatus"])))
    out += _flag(
        part,
        "embeddable",
        _p("This video can be embedded on other websites"),
        _p("This video cannot be embedded on other websites"),
    )
    out += _flag(
        part,
        "madeForKids",
        _p("This video is designated as {}", _orange("child-directed")),
        _p("This video is not child-directed"),
    )
    out += _flag(
        part,
        "selfDeclaredMadeForKids",
        _p("The video owner designated this video as {}", _orange("child-directed")),
        _p("The video owner designated this video as not child-directed"),
    )
    if part.get("license"):
        out.append(_p("License: {}", part["license"]))
    return out


def _video_live_streaming_details(part: dict, ctx: RenderContext) -> list:
    out = []
    now = ctx.now
    scheduled = parse_timestamp(part["scheduledStartTime"]) if "scheduledStartTime" in part else None
    started = parse_timestamp(part["actualStartTime"]) if "actualStartTime" in part else None
    ended = parse_timestamp(part["actualEndTime"]) if "actualEndTime" in part else None

    if scheduled and not started:
        text = format_duration(get_duration(scheduled, now))
        if scheduled > now:
            out.append(_p("The stream hasn't started yet. It will start in {}", _orange(text)))
        else:
            out.append(_p("The stream is over. It was supposed to start {} ago", _orange(text)))
    if started and scheduled:
        text = format_duration(get_duration(started, scheduled))
        if started > scheduled:
            out.append(_p("The stream was {} late to start", _orange(text)))
        else:
            out.append(_p("The stream was {} early to start", _orange(text)))
    if started and not ended:
        text = format_duration(get_duration(started, now))
        out.append(_p("The stream is still going. It has been live for {}", _orange(text)))
    if started and ended:
        text = format_duration(get_duration(started, ended))
        out.append(_p("The stream is over. Its length was {}", _orange(text)))
    return out


def _video_content_details(part: dict, ctx: RenderContext) -> list:
    out = []
    text = format_duration(parse_iso_duration(part.get("duration", "PT0S")))
    if text == "0s":
        out.append(_p("Livestream? A video should not be 0 seconds long."))
    else:
        out.append(_p("The video length is <span style='color:orange'>{}</span>", text))

    if part.get("definition"):
        out.append(_p("Definition: {}", part["definition"].upper()))
    if "caption" in part:
        # Delivered as the strings "true"/"false"
        if str(part["caption"]).lower() == "true":
            out.append(_p("Captions are available"))
        else:
            out.append(_p("There are no captions"))
    if part.get("licensedContent"):
        out.append(_p("This video is {}", _orange("licensed content")))

    restriction = part.get("regionRestriction") or {}
    if restriction.get("allowed"):
        out.append(_p("Only viewable in: {}", ", ".join(restriction["allowed"])))
    if restriction.get("blocked"):
        out.append(_p("Blocked in: {}", ", ".join(restriction["blocked"])))
    return out


# ── channel ───────────────────────────────────────────────────────────────────

def _channel_snippet(part: dict, ctx: RenderContext) -> list:
    out = _thumbnail(part, "mb-15 profile")
    out.append(_title(part))
    if part.get("publishedAt"):
        out.append(_dated("Channel created on", part["publishedAt"], ctx))
    if "country" in part:
        out.append(_p("The channel is associated with the country code {}", _orange(part["country"])))
    else:
        out.append(_p("The channel doesn't have an associated country."))
    return out


def _channel_statistics(part: dict, ctx: RenderContext) -> list:
    out = []
    if part.get("hiddenSubscriberCount"):
        out.append(_p("This channel has a <strong>hidden subscriber count.</strong>"))
    elif "subscriberCount" in part:
        out.append(_p("<strong>Subscribers:</strong> {}", _count(part["subscriberCount"])))
    if "videoCount" in part:
        out.append(_p("<strong>Videos:</strong> {}", _count(part["videoCount"])))
    if "viewCount" in part:
        out.append(_p("<strong>Views:</strong> {}", _count(part["viewCount"])))
    return out


def _channel_branding_settings(part: dict, ctx: RenderContext) -> list:
    out = []
    settings = part.get("channel") or {}
    if "trackingAnalyticsAccountId" in settings:
        out.append(_p("This channel is tracking and measuring traffic with Google Analytics"))
    if settings.get("moderateComments"):
        out.append(_p("Comments on the channel page require approval by the channel owner."))
    return out


def _channel_content_details(part: dict, ctx: RenderContext) -> list:
    related = part.get("relatedPlaylists") or {}
    out = []
    for key, label in (("uploads", "Uploads playlist"), ("favorites", "Favorites playlist"), ("likes", "Likes playlist")):
        if related.get(key):
            out.append(_playlist_link(related[key], label))
    return out


def _channel_content_owner_details(part: dict, ctx: RenderContext) -> list:
    if not part.get("contentOwner"):
        return []
    out = [_p("This channel is linked to the content owner {}", _orange(part["contentOwner"]))]
    if part.get("timeLinked"):
        out.append(_dated("Linked on", part["timeLinked"], ctx))
    return out


def _channel_status(part: dict, ctx: RenderContext) -> list:
    out = []
    long_uploads = part.get("longUploadsStatus")
    longer = _orange(f"longer than {LONG_UPLOAD_MINUTES} minutes")
    if long_uploads == "allowed":
        out.append(_p("This channel can upload videos {}", longer))
    elif long_uploads == "disallowed":
        out.append(_p("This channel <strong>cannot</strong> upload videos {}", longer))
    elif long_uploads == "eligible":
        out.append(_p("This channel is eligible to upload videos {} but has not enabled it yet.", longer))
    else:
        out.append(_p("It is unspecified whether this channel can upload videos longer than {} minutes.", LONG_UPLOAD_MINUTES))

    out += _flag(
        part,
        "madeForKids",
        _p("This channel is designated as {}", _orange("child-directed")),
        _p("This channel is not child-directed"),
    )
    out += _flag(
        part,
        "selfDeclaredMadeForKids",
        _p("The channel owner designated this channel as {}", _orange("child-directed")),
        _p("The channel owner designated this channel as not child-directed"),
    )
    return out


# ── playlist ──────────────────────────────────────────────────────────────────

def _playlist_snippet(part: dict, ctx: RenderContext) -> list:
    out = _thumbnail(part)
    out.append(_title(part))
    out.append(
        _p("<strong>Published by</strong> {}", _channel_link(part.get("channelId", ""), part.get("channelTitle", "")))
    )
    if part.get("publishedAt"):
        out.append(_dated("Playlist created on", part["publishedAt"], ctx))
    return out


def _playlist_status(part: dict, ctx: RenderContext) -> list:
    if not part.get("privacyStatus"):
        return []
    return [_p("Privacy status: {}", _orange(part["privacyStatus"]))]


def _playlist_content_details(part: dict, ctx: RenderContext) -> list:
    if "itemCount" not in part:
        return []
    return [_p("This playlist has {} item(s)", _orange(_count(part["itemCount"])))]


def _table(*specs: PartSpec) -> dict[str, PartSpec]:
    return {spec.name: spec for spec in specs}


PART_REGISTRY: dict[str, dict[str, PartSpec]] = {
    "video": _table(
        PartSpec("snippet", "Snippet", _video_snippet, follow_up=_channel_follow_up),
        PartSpec("statistics", "Statistics", _video_statistics),
        PartSpec("recordingDetails", "Geolocation", _video_recording_details),
        PartSpec("status", "Status", _video_status),
        PartSpec("liveStreamingDetails", "Livestream Details", _video_live_streaming_details),
        PartSpec("localizations", "Localizations", _localizations),
        PartSpec("contentDetails", "Content Details", _video_content_details),
        PartSpec("topicDetails", "Topic Details", _topic_details),
    ),
    "channel": _table(
        PartSpec("snippet", "Snippet", _channel_snippet),
        PartSpec("statistics", "Statistics", _channel_statistics),
        PartSpec("brandingSettings", "Branding Settings", _channel_branding_settings),
        PartSpec("contentDetails", "Content Details", _channel_content_details),
        PartSpec("contentOwnerDetails", "Content Owner Details", _channel_content_owner_details),
        PartSpec("invideoPromotion", "In-Video Promotion", _no_markup),
        PartSpec("localizations", "Localizations", _localizations),
        PartSpec("status", "Status", _channel_status),
        PartSpec("topicDetails", "Topic Details", _topic_details),
    ),
    "playlist": _table(
        PartSpec("snippet", "Snippet", _playlist_snippet, follow_up=_channel_follow_up),
        PartSpec("status", "Status", _playlist_status),
        PartSpec("localizations", "Localizations", _localizations),
        PartSpec("contentDetails", "Content Details", _playlist_content_details),
    ),
}

ENTITY_TYPES = tuple(PART_REGISTRY)


def part_names(entity_type: str) -> list[str]:
    """Parts to request for an entity, in display order."""
    return list(PART_REGISTRY[entity_type])
