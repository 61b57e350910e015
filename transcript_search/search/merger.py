"""Coalesce adjacent same-lesson results into passages"""

from typing import Dict, List
import logging

from transcript_search.schemas.search import RankedSnippet

logger = logging.getLogger(__name__)

SEQUENTIAL = "sequential"
TRANSITIVE = "transitive"


def _is_adjacent(current: RankedSnippet, candidate: RankedSnippet, gap_seconds: int) -> bool:
    return (
        candidate.lesson_id == current.lesson_id
        and candidate.start_seconds <= current.end_seconds + gap_seconds
    )


def _absorb(current: RankedSnippet, candidate: RankedSnippet):
    current.end_seconds = max(current.end_seconds, candidate.end_seconds)
    current.text = f"{current.text} {candidate.text}"


def merge_adjacent_chunks(results: List[RankedSnippet], gap_seconds: int = 5) -> List[RankedSnippet]:
    """
    Single left-to-right merge over the ranked list.

    A result is absorbed into the running passage while it belongs to the
    same lesson and starts no more than ``gap_seconds`` after the passage
    ends. Once the pass moves on it never revisits an earlier passage. The
    passage keeps the id, confidence and snippet of its first result.
    """
    merged: List[RankedSnippet] = []
    i = 0

    while i < len(results):
        current = results[i].model_copy()
        j = i + 1

        while j < len(results) and _is_adjacent(current, results[j], gap_seconds):
            _absorb(current, results[j])
            j += 1

        merged.append(current)
        i = j

    if len(merged) != len(results):
        logger.debug(f"Merged {len(results)} results into {len(merged)} passages")
    return merged


def merge_transitive(results: List[RankedSnippet], gap_seconds: int = 5) -> List[RankedSnippet]:
    """
    Exact merge: union of time-adjacent results per lesson.

    Each lesson's results are swept in time order; the passage takes the id,
    confidence and snippet of its best-ranked member, and passages are ordered
    by that member's rank.
    """
    by_lesson: Dict[int, List[int]] = {}
    for rank, result in enumerate(results):
        by_lesson.setdefault(result.lesson_id, []).append(rank)

    passages = []  # (best_rank, passage)
    for ranks in by_lesson.values():
        ranks.sort(key=lambda rank: (results[rank].start_seconds, rank))

        group = [ranks[0]]
        end_seconds = results[ranks[0]].end_seconds
        for rank in ranks[1:]:
            if results[rank].start_seconds <= end_seconds + gap_seconds:
                group.append(rank)
                end_seconds = max(end_seconds, results[rank].end_seconds)
            else:
                passages.append(_build_passage(results, group))
                group = [rank]
                end_seconds = results[rank].end_seconds
        passages.append(_build_passage(results, group))

    passages.sort(key=lambda item: item[0])
    return [passage for _, passage in passages]


def _build_passage(results: List[RankedSnippet], group: List[int]):
    best_rank = min(group)
    passage = results[best_rank].model_copy(update={
        "start_seconds": results[group[0]].start_seconds,
        "end_seconds": max(results[rank].end_seconds for rank in group),
        "text": " ".join(results[rank].text for rank in group)
    })
    return best_rank, passage


def merge_results(
    results: List[RankedSnippet],
    gap_seconds: int = 5,
    strategy: str = SEQUENTIAL
) -> List[RankedSnippet]:
    """Merge with the named strategy"""
    if strategy == TRANSITIVE:
        return merge_transitive(results, gap_seconds)
    if strategy == SEQUENTIAL:
        return merge_adjacent_chunks(results, gap_seconds)
    raise ValueError(f"Unknown merge strategy: {strategy}")
