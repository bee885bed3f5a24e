import pytest

from core.exceptions import (
    SessionNotFoundError, SessionLimitError, HintAlreadyUsedError, InterviewCompleteError,
    QuestionAlreadyAnsweredError,
)
from services.session_store import InterviewSessionStore
from tests.fakes import FakeClock


@pytest.fixture
def store(clock):
    return InterviewSessionStore(clock=clock, ttl_seconds=1800, completion_grace_seconds=5)


def _play(store, session, answers):
    for i in range(answers):
        store.record_answer(session.id, f"answer {i}", 7)
        if not session.is_complete:
            store.add_question(session.id, f"Q{session.question_number + 1}")


def test_create_starts_at_question_one(store):
    session = store.create("React", "1.2.3.4", "What is JSX?")

    assert session.question_number == 1
    assert session.questions == ["What is JSX?"]
    assert session.answers == [] and session.scores == []
    assert len(session.id) <= 50
    assert store.get(session.id) is session


def test_ids_are_unique(store):
    ids = {store.create("React", f"client-{i}", "Q1").id for i in range(50)}
    assert len(ids) == 50


def test_unknown_session(store):
    with pytest.raises(SessionNotFoundError):
        store.get("nope")


def test_general_knowledge_completes_after_three(store):
    session = store.create("General Knowledge", "c", "What color is grass?")
    _play(store, session, 2)
    assert not session.is_complete
    assert session.question_number == 3

    store.record_answer(session.id, "blue", 9)
    assert session.is_complete
    assert len(session.answers) == len(session.scores) == session.question_number == 3


@pytest.mark.parametrize("technology", ["React", "Scrum Master", "AWS Solutions Architect"])
def test_other_topics_complete_after_five(store, technology):
    session = store.create(technology, "c", "Q1")
    _play(store, session, 4)
    assert not session.is_complete

    store.record_answer(session.id, "last", 6)
    assert session.is_complete
    assert session.scores == [7, 7, 7, 7, 6]


def test_answer_count_never_exceeds_questions(store):
    session = store.create("React", "c", "Q1")
    for _ in range(5):
        store.record_answer(session.id, "a", 5)
        assert len(session.answers) == len(session.scores) <= len(session.questions) == session.question_number
        if not session.is_complete:
            store.add_question(session.id, "next")


def test_second_answer_without_new_question_is_rejected(store):
    session = store.create("React", "c", "Q1")
    store.record_answer(session.id, "first", 6)

    with pytest.raises(QuestionAlreadyAnsweredError):
        store.record_answer(session.id, "second", 9)
    assert session.answers == ["first"]
    assert session.scores == [6]
    assert len(session.questions) == 1


def test_answer_for_a_stale_question_number_is_rejected(store):
    session = store.create("React", "c", "Q1")
    store.record_answer(session.id, "first", 6, question_number=1)
    store.add_question(session.id, "Q2")

    with pytest.raises(QuestionAlreadyAnsweredError):
        store.record_answer(session.id, "late answer to Q1", 9, question_number=1)
    assert session.answers == ["first"]

    store.record_answer(session.id, "second", 8, question_number=2)
    assert session.scores == [6, 8]


def test_completed_session_rejects_more_answers(store):
    session = store.create("General Knowledge", "c", "Q1")
    _play(store, session, 3)

    with pytest.raises(InterviewCompleteError):
        store.record_answer(session.id, "extra", 10)
    with pytest.raises(InterviewCompleteError):
        store.add_question(session.id, "Q4")


def test_completed_session_removed_after_grace(store, clock):
    session = store.create("General Knowledge", "c", "Q1")
    _play(store, session, 3)

    clock.advance(4)
    assert store.get(session.id) is session

    clock.advance(1)
    with pytest.raises(SessionNotFoundError):
        store.get(session.id)
    assert session.id not in store


def test_session_expires_after_ttl_regardless_of_progress(store, clock):
    session = store.create("React", "c", "Q1")
    store.record_answer(session.id, "a", 5)

    clock.advance(1800)
    assert store.get(session.id) is session

    clock.advance(1)
    with pytest.raises(SessionNotFoundError):
        store.get(session.id)


def test_per_client_cap(store):
    for _ in range(3):
        store.create("React", "1.2.3.4", "Q1")

    with pytest.raises(SessionLimitError):
        store.create("React", "1.2.3.4", "Q1")

    # other clients are unaffected
    store.create("React", "5.6.7.8", "Q1")


def test_cap_frees_up_on_expiry_and_completion(store, clock):
    first = store.create("General Knowledge", "c", "Q1")
    store.create("React", "c", "Q1")
    store.create("React", "c", "Q1")
    assert store.active_count("c") == 3

    _play(store, first, 3)
    assert store.active_count("c") == 2
    store.create("React", "c", "Q1")

    clock.advance(1801)
    assert store.active_count("c") == 0


def test_hint_once_per_question(store):
    session = store.create("React", "c", "Q1")
    store.use_hint(session.id)

    with pytest.raises(HintAlreadyUsedError):
        store.use_hint(session.id)

    store.record_answer(session.id, "a", 5)
    store.add_question(session.id, "Q2")
    store.use_hint(session.id)
    assert session.hints_used == {1, 2}


def test_sweep_removes_expired_and_finished_sessions(clock):
    store = InterviewSessionStore(clock=clock)
    old = store.create("React", "a", "Q1")
    clock.advance(1000)
    done = store.create("General Knowledge", "b", "Q1")
    _play(store, done, 3)
    fresh = store.create("React", "c", "Q1")

    clock.advance(10)
    assert store.sweep() == 1
    assert done.id not in store
    assert old.id in store and fresh.id in store

    clock.advance(800)
    assert store.sweep() == 1
    assert old.id not in store
    assert len(store) == 1


def test_average_score():
    store = InterviewSessionStore(clock=FakeClock())
    session = store.create("React", "c", "Q1")
    assert session.average_score == 0.0
    store.record_answer(session.id, "a", 6)
    store.add_question(session.id, "Q2")
    store.record_answer(session.id, "b", 9)
    assert session.average_score == 7.5


def test_hint_for_last_question_during_grace(store, clock):
    session = store.create("General Knowledge", "c", "Q1")
    _play(store, session, 3)
    assert session.is_complete

    assert store.use_hint(session.id).current_question == "Q3"
    with pytest.raises(HintAlreadyUsedError):
        store.use_hint(session.id)

    clock.advance(5)
    with pytest.raises(SessionNotFoundError):
        store.use_hint(session.id)
