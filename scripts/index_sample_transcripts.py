"""
Sample transcript indexing script

Indexes a few sample lesson transcripts into an in-process search service
and runs a query against them. The store is in-memory, so nothing persists.
Usage: python scripts/index_sample_transcripts.py [query]
"""

import sys
import asyncio
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from transcript_search.exceptions import TranscriptSearchException
from transcript_search.services.search_service import TranscriptSearchService
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# Sample transcripts keyed by lesson id (see fixtures/lessons.json)
SAMPLE_TRANSCRIPTS = {
    5: """
Welcome back. In this lesson we look at useEffect and side effects. An effect runs
after React has rendered, which makes it the right place for subscriptions, timers
and data fetching. Every effect can return a cleanup function. React calls the
cleanup before running the effect again and when the component unmounts, so a
subscription opened in the effect should be closed in the cleanup. The dependency
array controls when the effect re-runs: an empty array means once after mount, and
leaving it out means after every render. Missing dependencies are the most common
source of stale values, so let the linter help you keep the array honest.
    """,
    7: """
There are two rules of hooks. First, only call hooks at the top level of a
component or of another hook, never inside loops, conditions or nested functions.
React relies on the call order of hooks to match state to the right hook between
renders. Second, only call hooks from React function components or from custom
hooks, not from regular JavaScript functions. If you need a hook conditionally,
move the condition inside the hook instead. The eslint plugin for hooks checks
both rules for you and will flag violations while you type.
    """,
    9: """
Pricing your program starts with the outcome, not the hours. Write down the
transformation your client gets and what that change is worth to them. Then
offer three tiers: a self-paced tier, a group coaching tier and a premium
one-to-one tier. Most clients pick the middle option, so make sure it is the one
you most want to sell. Raise prices for new clients first and keep existing
clients on their current rate until renewal.
    """
}


async def run(query: str):
    service = TranscriptSearchService.from_fixtures()

    logger.info(f"Indexing {len(SAMPLE_TRANSCRIPTS)} sample transcripts...")
    logger.info("-" * 60)

    for lesson_id, transcript in SAMPLE_TRANSCRIPTS.items():
        try:
            count = await service.index_transcript(lesson_id, transcript.strip())
            logger.info(f"  Lesson {lesson_id}: {count} chunks")
        except TranscriptSearchException as e:
            logger.error(f"  Lesson {lesson_id} failed: {e}")

    logger.info("-" * 60)
    logger.info(f"Searching for: {query}")

    # Mock vectors are noise, so search with no threshold to see every chunk ranked
    results = await service.search(query, threshold=-1.0, limit=5)
    for i, result in enumerate(results, 1):
        logger.info(
            f"  {i}. [{result.confidence:.3f}] {result.lesson_title} "
            f"({result.start_seconds}s-{result.end_seconds}s): {result.snippet[:80]}"
        )

    analytics = await service.analytics()
    logger.info("-" * 60)
    logger.info(f"Total searches: {analytics.total_searches}, unique users: {analytics.unique_users}")
    for popular in analytics.popular_queries:
        logger.info(f"  {popular.count}x {popular.query}")


def main():
    query = " ".join(sys.argv[1:]) or "hooks cleanup"
    asyncio.run(run(query))


if __name__ == "__main__":
    main()
