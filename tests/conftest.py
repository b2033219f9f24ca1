"""Shared fixtures: a fake API client and sample list responses."""

from datetime import datetime, timezone

import pytest

from ytmetadata.parts import RenderContext

FIXED_NOW = datetime(2020, 1, 1, tzinfo=timezone.utc)

VIDEO_ID = "dQw4w9WgXcQ"
CHANNEL_ID = "UCuAXFkgsw1L7xaCfnd5JJOw"
PLAYLIST_ID = "PLx0sYbCqOb8TBPRdmBHs5Iftvv9TPboYG"


class FakeClient:
    """Stands in for YouTubeClient; responses keyed by resource name."""

    def __init__(self, responses=None):
        self.responses = responses or {}
        self.calls = []

    def list(self, resource, **params):
        self.calls.append((resource, params))
        response = self.responses.get(resource, {"items": []})
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def ctx():
    return RenderContext(now=FIXED_NOW)


@pytest.fixture
def video_response():
    return {
        "kind": "youtube#videoListResponse",
        "items": [
            {
                "id": VIDEO_ID,
                "snippet": {
                    "publishedAt": "2009-10-25T06:57:33Z",
                    "channelId": CHANNEL_ID,
                    "title": "Rick Astley - Never Gonna Give You Up <Official>",
                    "channelTitle": "Rick Astley",
                    "thumbnails": {"medium": {"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/mqdefault.jpg"}},
                    "tags": ["rick astley", "never gonna give you up"],
                },
                "statistics": {
                    "viewCount": "1500000000",
                    "likeCount": "17000000",
                    "favoriteCount": "0",
                    "commentCount": "2300000",
                },
                "status": {"privacyStatus": "public", "embeddable": True, "madeForKids": False},
                "contentDetails": {"duration": "PT3M33S", "definition": "hd", "caption": "true"},
                "topicDetails": {"topicCategories": ["https://en.wikipedia.org/wiki/Pop_music"]},
            }
        ],
    }


@pytest.fixture
def channel_response():
    return {
        "kind": "youtube#channelListResponse",
        "items": [
            {
                "id": CHANNEL_ID,
                "snippet": {
                    "title": "Rick Astley",
                    "publishedAt": "2015-02-01T16:32:22Z",
                    "thumbnails": {"medium": {"url": "https://yt3.ggpht.com/rick"}},
                    "country": "GB",
                },
                "statistics": {
                    "viewCount": "2000000000",
                    "subscriberCount": "4000000",
                    "hiddenSubscriberCount": False,
                    "videoCount": "200",
                },
                "contentDetails": {"relatedPlaylists": {"uploads": "UUuAXFkgsw1L7xaCfnd5JJOw", "likes": ""}},
                "brandingSettings": {"channel": {"title": "Rick Astley"}},
                "status": {"privacyStatus": "public", "longUploadsStatus": "allowed", "madeForKids": False},
            }
        ],
    }


@pytest.fixture
def playlist_response():
    return {
        "kind": "youtube#playlistListResponse",
        "items": [
            {
                "id": PLAYLIST_ID,
                "snippet": {
                    "publishedAt": "2014-02-20T20:10:03Z",
                    "channelId": CHANNEL_ID,
                    "title": "Playlist & <Friends>",
                    "channelTitle": "Rick Astley",
                    "thumbnails": {"medium": {"url": "https://i.ytimg.com/vi/x/mqdefault.jpg"}},
                },
                "status": {"privacyStatus": "public"},
                "contentDetails": {"itemCount": 12},
            }
        ],
    }


@pytest.fixture
def fake_client(video_response, channel_response, playlist_response):
    return FakeClient(
        {
            "videos": video_response,
            "channels": channel_response,
            "playlists": playlist_response,
        }
    )
