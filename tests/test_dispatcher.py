"""Tests for dispatcher module."""

from ytmetadata import url_parser
from ytmetadata.dispatcher import UNRECOGNIZED_INPUT, Dispatcher, video_thumbnails
from ytmetadata.parts import RenderContext, part_names
from ytmetadata.renderer import GOOD, UNKNOWN
from ytmetadata.url_parser import ParsedInput, classify_input
from ytmetadata.youtube_api import YouTubeApiError

from conftest import CHANNEL_ID, FIXED_NOW, PLAYLIST_ID, VIDEO_ID, FakeClient


def _dispatcher(client):
    return Dispatcher(client, lambda: RenderContext(now=FIXED_NOW))


def test_video_requests_all_parts_then_channel(fake_client):
    result = _dispatcher(fake_client).submit(classify_input(f"https://youtu.be/{VIDEO_ID}"))

    assert fake_client.calls == [
        ("videos", {"part": ",".join(part_names("video")), "id": VIDEO_ID}),
        ("channels", {"part": ",".join(part_names("channel")), "id": CHANNEL_ID}),
    ]
    assert result.visible == {"video", "channel"}
    assert result.sections["video"].found
    assert result.sections["channel"].found
    assert result.errors == []


def test_video_thumbnails(fake_client):
    result = _dispatcher(fake_client).submit(classify_input(VIDEO_ID))
    assert [t.url for t in result.thumbnails] == [f"https://img.youtube.com/vi/{VIDEO_ID}/{i}.jpg" for i in range(4)]
    assert result.thumbnails[0].search_url.startswith(
        "https://www.google.com/searchbyimage?image_url=https%3A%2F%2Fimg.youtube.com"
    )


def test_video_thumbnails_helper():
    thumbs = video_thumbnails("abc")
    assert [t.index for t in thumbs] == [0, 1, 2, 3]


def test_channel_user_uses_for_username(fake_client):
    result = _dispatcher(fake_client).submit(classify_input("https://www.youtube.com/user/RickAstleyVEVO"))
    assert fake_client.calls == [
        ("channels", {"part": ",".join(part_names("channel")), "forUsername": "RickAstleyVEVO"}),
    ]
    assert result.visible == {"channel"}
    assert result.thumbnails == []


def test_channel_id_hides_others(fake_client):
    result = _dispatcher(fake_client).submit(classify_input(f"https://www.youtube.com/channel/{CHANNEL_ID}"))
    assert result.visible == {"channel"}
    assert len(fake_client.calls) == 1


def test_playlist_hides_video_and_follows_channel(fake_client):
    result = _dispatcher(fake_client).submit(classify_input(f"https://www.youtube.com/playlist?list={PLAYLIST_ID}"))
    assert [c[0] for c in fake_client.calls] == ["playlists", "channels"]
    assert result.visible == {"playlist", "channel"}
    assert result.sections["playlist"].panels[0].status == GOOD


def test_unknown_input_makes_no_request(fake_client):
    result = _dispatcher(fake_client).submit(classify_input("https://vimeo.com/1"))
    assert fake_client.calls == []
    assert result.errors == [UNRECOGNIZED_INPUT]
    assert result.visible == {"video", "channel", "playlist"}


def test_unknown_parsed_input_is_rejected_before_routing(fake_client):
    result = _dispatcher(fake_client).submit(ParsedInput(type=url_parser.UNKNOWN, original_input="hello"))
    assert fake_client.calls == []
    assert result.errors == [UNRECOGNIZED_INPUT]
    assert all(section.found is False for section in result.sections.values())


def test_api_error_is_reported_not_raised():
    client = FakeClient({"videos": YouTubeApiError("quota exceeded", status_code=403)})
    result = _dispatcher(client).submit(classify_input(VIDEO_ID))
    assert len(client.calls) == 1
    assert any("quota exceeded" in e for e in result.errors)
    assert all(p.status == UNKNOWN for p in result.sections["video"].panels)
    assert result.thumbnails == []


def test_no_items_reported(fake_client):
    fake_client.responses["videos"] = {"items": []}
    result = _dispatcher(fake_client).submit(classify_input(VIDEO_ID))
    assert result.errors == [f"No video found for {VIDEO_ID}."]
    assert [c[0] for c in fake_client.calls] == ["videos"]


def test_follow_up_failure_keeps_primary(fake_client):
    fake_client.responses["channels"] = YouTubeApiError("backend error", status_code=500)
    result = _dispatcher(fake_client).submit(classify_input(VIDEO_ID))
    assert result.sections["video"].found
    assert not result.sections["channel"].found
    assert any("backend error" in e for e in result.errors)
    # The follow-up never hides sections
    assert result.visible == {"video", "channel"}
