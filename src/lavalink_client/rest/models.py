"""
Data models returned by a node's REST API.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class LoadType(Enum):
    """Outcome of a ``/loadtracks`` request."""

    TRACK_LOADED = "TRACK_LOADED"
    PLAYLIST_LOADED = "PLAYLIST_LOADED"
    SEARCH_RESULT = "SEARCH_RESULT"
    NO_MATCHES = "NO_MATCHES"
    LOAD_FAILED = "LOAD_FAILED"


@dataclass
class LoadedTrackInfo:
    """Meta information about a loaded track."""

    title: str
    author: str
    length: int
    identifier: str
    uri: Optional[str] = None
    is_stream: bool = False
    is_seekable: bool = True
    position: int = 0
    source_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoadedTrackInfo":
        return cls(
            title=data.get("title", ""),
            author=data.get("author", ""),
            length=int(data.get("length", 0)),
            identifier=data.get("identifier", ""),
            uri=data.get("uri"),
            is_stream=bool(data.get("isStream", False)),
            is_seekable=bool(data.get("isSeekable", True)),
            position=int(data.get("position", 0)),
            source_name=data.get("sourceName"),
        )


@dataclass
class LoadedTrack:
    """A playable track: the base64 track blob plus its meta information."""

    track: str
    info: LoadedTrackInfo

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoadedTrack":
        return cls(track=data["track"], info=LoadedTrackInfo.from_dict(data["info"]))


@dataclass
class PlaylistInfo:
    name: Optional[str] = None
    # -1 when the playlist has no selected track
    selected_track: int = -1

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlaylistInfo":
        selected = data.get("selectedTrack")
        return cls(
            name=data.get("name"),
            selected_track=-1 if selected is None else int(selected),
        )


@dataclass
class LoadException:
    """Why a ``LOAD_FAILED`` load did not succeed."""

    message: str
    severity: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoadException":
        return cls(
            message=data.get("message", ""), severity=data.get("severity", "COMMON")
        )


@dataclass
class LoadResult:
    """Response of a ``/loadtracks`` request."""

    load_type: LoadType
    tracks: List[LoadedTrack] = field(default_factory=list)
    playlist_info: PlaylistInfo = field(default_factory=PlaylistInfo)
    exception: Optional[LoadException] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoadResult":
        exception = data.get("exception")
        return cls(
            load_type=LoadType(data["loadType"]),
            tracks=[LoadedTrack.from_dict(track) for track in data.get("tracks") or []],
            playlist_info=PlaylistInfo.from_dict(data.get("playlistInfo") or {}),
            exception=LoadException.from_dict(exception) if exception else None,
        )

    @property
    def selected_track(self) -> Optional[LoadedTrack]:
        """The playlist's selected track, if the node reported one."""
        index = self.playlist_info.selected_track
        if 0 <= index < len(self.tracks):
            return self.tracks[index]
        return None
