"""Case-insensitive track search over a parsed Artist."""

from pydantic import Field

from tracker_core.models import Artist, Era, Track, TrackerModel


class SearchResult(TrackerModel):
    query: str
    albums: list[Era] = Field(default_factory=list)
    total_albums: int = 0
    total_tracks: int = 0


def track_matches(track: Track, query: str) -> bool:
    needle = query.lower()
    haystack = (track.title.main, track.raw_name, *track.title.alternate_names)
    return any(needle in text.lower() for text in haystack)


def search_artist(artist: Artist, query: str) -> SearchResult:
    """Albums holding at least one matching track, each trimmed to its matches."""
    query = query.strip()
    if not query:
        return SearchResult(query=query)
    albums: list[Era] = []
    for album in artist.albums:
        tracks = [track for track in album.tracks if track_matches(track, query)]
        if tracks:
            albums.append(album.model_copy(update={"tracks": tracks}))
    return SearchResult(
        query=query,
        albums=albums,
        total_albums=len(albums),
        total_tracks=sum(len(album.tracks) for album in albums),
    )
