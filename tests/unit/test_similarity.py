"""Test cosine similarity and chunk scoring"""

import math
import random

import pytest

from transcript_search.schemas.search import TranscriptChunk
from transcript_search.search.catalog import LessonCatalog, Lesson, Module, Course
from transcript_search.search.similarity import SimilarityScorer, cosine_similarity, UNKNOWN_LESSON_TITLE


@pytest.fixture
def catalog():
    return LessonCatalog(
        lessons=[
            Lesson(id=7, title="Rules of Hooks", module_id=2),
            Lesson(id=8, title="Pricing Your Program", module_id=3)
        ],
        modules=[Module(id=2, course_id=1), Module(id=3, course_id=2)],
        courses=[Course(id=1, title="React"), Course(id=2, title="Coaching")]
    )


def make_chunk(chunk_id, lesson_id, vector, start=0, end=10, text="hooks run in order"):
    return TranscriptChunk(
        id=chunk_id,
        lesson_id=lesson_id,
        start_seconds=start,
        end_seconds=end,
        text=text,
        embedding_vector=vector
    )


def test_vector_is_fully_similar_to_itself():
    rng = random.Random(3)
    vector = [rng.random() - 0.5 for _ in range(384)]

    assert math.isclose(cosine_similarity(vector, vector), 1.0, rel_tol=1e-9)


def test_similarity_is_symmetric():
    rng = random.Random(5)
    a = [rng.random() - 0.5 for _ in range(64)]
    b = [rng.random() - 0.5 for _ in range(64)]

    assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))


def test_zero_vector_scores_zero():
    assert cosine_similarity([0.0, 0.0], [1.0, 0.0]) == 0.0


def test_length_mismatch_is_rejected():
    with pytest.raises(ValueError):
        cosine_similarity([1.0], [1.0, 0.0])


def test_score_filters_by_threshold_and_sorts(catalog):
    scorer = SimilarityScorer(catalog)
    chunks = [
        make_chunk(1, 7, [0.6, 0.8]),
        make_chunk(2, 7, [1.0, 0.0]),
        make_chunk(3, 8, [0.0, 1.0]),
        make_chunk(4, 8, [0.8, 0.6]),
    ]

    results = scorer.score("hooks", [1.0, 0.0], chunks, threshold=0.55)

    assert [r.chunk_id for r in results] == [2, 4, 1]
    assert all(r.confidence >= 0.55 for r in results)
    assert results[0].lesson_title == "Rules of Hooks"
    assert results[0].snippet == "**hooks** run in order"


def test_ties_keep_scan_order(catalog):
    scorer = SimilarityScorer(catalog)
    chunks = [make_chunk(i, 7, [1.0, 0.0]) for i in (5, 3, 9)]

    results = scorer.score("hooks", [1.0, 0.0], chunks, threshold=0.5)

    assert [r.chunk_id for r in results] == [5, 3, 9]


def test_unknown_lesson_gets_placeholder_title(catalog):
    scorer = SimilarityScorer(catalog)
    results = scorer.score("hooks", [1.0], [make_chunk(1, 99, [1.0])], threshold=0.5)

    assert results[0].lesson_title == UNKNOWN_LESSON_TITLE


def test_filter_scope_by_lesson_and_course(catalog):
    scorer = SimilarityScorer(catalog)
    chunks = [make_chunk(1, 7, [1.0]), make_chunk(2, 8, [1.0]), make_chunk(3, 99, [1.0])]

    assert [c.id for c in scorer.filter_scope(chunks, lesson_id=8)] == [2]
    assert [c.id for c in scorer.filter_scope(chunks, course_id=1)] == [1]
    assert [c.id for c in scorer.filter_scope(chunks, lesson_id=8, course_id=1)] == [2]
    assert len(scorer.filter_scope(chunks)) == 3
