"""Test the search query log"""

from datetime import datetime, timezone

from transcript_search.schemas.search import SearchQueryLogEntry
from transcript_search.search.query_log import QueryLog, InMemoryQueryLogStore


class BrokenStore(InMemoryQueryLogStore):
    def append(self, entry):
        raise IOError("log store unavailable")


def test_log_assigns_increasing_ids_and_timestamp():
    log = QueryLog()

    first = log.log(user_id=1, query_text="hooks", top_result_ids=[3, 1])
    second = log.log(user_id=1, query_text="state")

    assert (first.id, second.id) == (1, 2)
    assert first.created_at.tzinfo is not None
    assert first.top_result_ids == [3, 1]


def test_log_failure_is_swallowed():
    log = QueryLog(BrokenStore())

    assert log.log(user_id=1, query_text="hooks") is None
    assert log.store.all() == []


def test_recent_returns_user_queries_newest_first():
    log = QueryLog()
    for text in ("one", "two", "three"):
        log.log(user_id=1, query_text=text)
    log.log(user_id=2, query_text="other user")

    recent = log.recent(1, limit=2)

    assert [entry.query_text for entry in recent] == ["three", "two"]


def test_seeded_entries_continue_id_sequence():
    seed = [SearchQueryLogEntry(
        id=41,
        user_id=3,
        query_text="seeded",
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc)
    )]
    log = QueryLog(InMemoryQueryLogStore(seed))

    entry = log.log(user_id=3, query_text="fresh")

    assert entry.id == 42
    assert [e.query_text for e in log.recent(3)] == ["fresh", "seeded"]


def test_analytics_counts_and_popular_queries():
    log = QueryLog()
    log.log(user_id=1, query_text="hooks", course_id=1)
    log.log(user_id=2, query_text="hooks", course_id=1)
    log.log(user_id=2, query_text="state", course_id=1)
    log.log(user_id=3, query_text="pricing", course_id=2)

    overall = log.analytics()
    assert overall.total_searches == 4
    assert overall.unique_users == 3
    assert overall.popular_queries[0].query == "hooks"
    assert overall.popular_queries[0].count == 2

    course = log.analytics(course_id=2)
    assert course.total_searches == 1
    assert [(p.query, p.count) for p in course.popular_queries] == [("pricing", 1)]


def test_analytics_limits_popular_queries_to_ten():
    log = QueryLog()
    for i in range(15):
        log.log(user_id=1, query_text=f"query {i}")

    assert len(log.analytics().popular_queries) == 10


def test_analytics_on_empty_log():
    analytics = QueryLog().analytics()

    assert analytics.total_searches == 0
    assert analytics.unique_users == 0
    assert analytics.popular_queries == []
