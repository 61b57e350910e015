"""Transcript chunking into overlapping timed windows"""

from typing import List, Optional, Sequence, Union, Dict, Any
import logging

from transcript_search.schemas.search import TextWindow, Timecode
from transcript_search.search.config import search_config, SearchConfig

logger = logging.getLogger(__name__)

TimecodeLike = Union[Timecode, Dict[str, Any]]


class TranscriptChunker:
    """
    Split transcript text into overlapping fixed-size windows.

    Time ranges are estimates: a window starts at the matching timecode when
    one is given, otherwise at ``index * seconds_per_chunk``, and lasts
    ``len(text) // chars_per_second`` seconds. They are not aligned to audio.
    """

    def __init__(
        self,
        chunk_size: Optional[int] = None,
        overlap: Optional[int] = None,
        boundary_ratio: Optional[float] = None,
        seconds_per_chunk: Optional[int] = None,
        chars_per_second: Optional[int] = None,
        config: Optional[SearchConfig] = None
    ):
        config = config or search_config
        self.chunk_size = chunk_size if chunk_size is not None else config.chunk_size
        self.overlap = overlap if overlap is not None else config.chunk_overlap
        self.boundary_ratio = boundary_ratio if boundary_ratio is not None else config.boundary_ratio
        self.seconds_per_chunk = seconds_per_chunk if seconds_per_chunk is not None else config.seconds_per_chunk
        self.chars_per_second = chars_per_second if chars_per_second is not None else config.chars_per_second

        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if not 0 <= self.overlap < self.chunk_size:
            raise ValueError("overlap must be smaller than chunk_size")
        if self.chars_per_second <= 0:
            raise ValueError("chars_per_second must be positive")

    def chunk_transcript(
        self,
        text: str,
        timecodes: Optional[Sequence[TimecodeLike]] = None
    ) -> List[TextWindow]:
        """
        Chunk transcript text

        Args:
            text: Raw transcript text
            timecodes: Optional timecodes, entry N gives the start of window N

        Returns:
            Ordered list of windows with estimated time ranges
        """
        windows: List[TextWindow] = []
        if not text:
            return windows

        timecodes = [self._to_timecode(tc) for tc in (timecodes or [])]
        length = len(text)
        start = 0
        index = 0

        while start < length:
            end = min(start + self.chunk_size, length)
            window_text = text[start:end]

            # Avoid splitting a word unless the last space is too far back
            if end < length:
                last_space = window_text.rfind(' ')
                if last_space > self.chunk_size * self.boundary_ratio:
                    window_text = window_text[:last_space]

            start_seconds = self._start_seconds(timecodes, index)
            end_seconds = start_seconds + len(window_text) // self.chars_per_second

            trimmed = window_text.strip()
            if trimmed:
                windows.append(TextWindow(
                    text=trimmed,
                    start_seconds=start_seconds,
                    end_seconds=end_seconds
                ))

            if end >= length:
                break

            start = end - self.overlap
            index += 1

        logger.debug(f"Chunked {length} characters into {len(windows)} windows")
        return windows

    def _start_seconds(self, timecodes: List[Timecode], index: int) -> int:
        if index < len(timecodes) and timecodes[index].start_seconds:
            return timecodes[index].start_seconds
        return index * self.seconds_per_chunk

    @staticmethod
    def _to_timecode(timecode: TimecodeLike) -> Timecode:
        if isinstance(timecode, Timecode):
            return timecode
        return Timecode.model_validate(timecode)
