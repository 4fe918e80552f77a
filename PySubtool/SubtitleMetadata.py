from __future__ import annotations

class WebVttTimestampMap:
    """
    X-TIMESTAMP-MAP header, mapping a cue time to an MPEG-TS presentation timestamp
    """
    def __init__(self, local : int = 0, mpegts : int = 0):
        self.local : int = local
        self.mpegts : int = mpegts

    def __eq__(self, other : object) -> bool:
        if not isinstance(other, WebVttTimestampMap):
            return False
        return (self.local, self.mpegts) == (other.local, other.mpegts)

    def __repr__(self) -> str:
        return f"WebVttTimestampMap(local={self.local}, mpegts={self.mpegts})"

class SubtitleMetadata:
    """
    File-level header fields. Only the fields relevant to the source format are populated.
    """
    def __init__(self, language : str|None = None, webvtt_timestamp_map : WebVttTimestampMap|None = None, title : str|None = None):
        self.language : str|None = language
        self.webvtt_timestamp_map : WebVttTimestampMap|None = webvtt_timestamp_map
        self.title : str|None = title
