"""One place that turns a requested publish kind into query clauses.

The same kind name filters differently depending on where it is listed:
a creator's own pages tell live recordings apart by ``broadcast_type``,
the home feed only shows finished on-demand media and live streams that
are currently in progress, and search only narrows by publish type.
"""

from enum import Enum
from typing import Iterable, List

from sqlalchemy import false

from models import (
    BroadcastType,
    LiveStatus,
    Playback,
    Publish,
    PublishType,
    StreamType,
    Visibility,
)


class PublishKind(str, Enum):
    all = "all"
    videos = "videos"
    shorts = "shorts"
    live = "live"
    blogs = "blogs"
    ads = "ads"


class PublishScope(str, Enum):
    CREATOR = "CREATOR"
    FEED = "FEED"
    SEARCH = "SEARCH"


LIVE_BROADCASTS = (BroadcastType.software, BroadcastType.webcam)


def _creator_clauses(kind: PublishKind) -> List:
    if kind == PublishKind.videos:
        return [Publish.publish_type == PublishType.Video, Publish.broadcast_type.is_(None)]
    if kind == PublishKind.shorts:
        return [Publish.publish_type == PublishType.Short, Publish.broadcast_type.is_(None)]
    if kind == PublishKind.live:
        return [Publish.publish_type == PublishType.Video, Publish.broadcast_type.in_(LIVE_BROADCASTS)]
    if kind == PublishKind.blogs:
        return [Publish.publish_type == PublishType.Blog]
    if kind == PublishKind.ads:
        return [Publish.publish_type == PublishType.Ads]
    return []


def _feed_clauses(kind: PublishKind) -> List:
    if kind == PublishKind.videos:
        return [Publish.publish_type == PublishType.Video, Publish.stream_type == StreamType.onDemand]
    if kind == PublishKind.shorts:
        return [Publish.publish_type == PublishType.Short, Publish.stream_type == StreamType.onDemand]
    if kind == PublishKind.live:
        return [
            Publish.publish_type == PublishType.Video,
            Publish.stream_type == StreamType.Live,
            Publish.playback.has(Playback.live_status == LiveStatus.inprogress),
        ]
    if kind == PublishKind.blogs:
        return [Publish.publish_type == PublishType.Blog]
    if kind == PublishKind.ads:
        return [Publish.publish_type == PublishType.Ads]
    return []


def _search_clauses(kind: PublishKind) -> List:
    if kind == PublishKind.videos:
        return [Publish.publish_type == PublishType.Video]
    if kind == PublishKind.shorts:
        return [Publish.publish_type == PublishType.Short]
    if kind == PublishKind.blogs:
        return [Publish.publish_type == PublishType.Blog]
    return []


_BUILDERS = {
    PublishScope.CREATOR: _creator_clauses,
    PublishScope.FEED: _feed_clauses,
    PublishScope.SEARCH: _search_clauses,
}


def publish_kind_filter(kind: PublishKind, *, scope: PublishScope) -> List:
    """Clauses to pass to ``Query.filter(*clauses)``; empty for ``all``."""
    return _BUILDERS[scope](PublishKind(kind))


def feed_visibility_filter(excluded_creator_ids: Iterable[str] = ()) -> List:
    """Public, fully uploaded publishes whose creator is not suppressed."""
    excluded = list(excluded_creator_ids)
    clauses = [Publish.visibility == Visibility.public, Publish.uploading == false()]
    if excluded:
        clauses.append(Publish.creator_id.notin_(excluded))
    return clauses


def is_live_stream() -> List:
    return [Publish.publish_type == PublishType.Video, Publish.stream_type == StreamType.Live]
