import asyncio
from datetime import datetime, timedelta

import pytest

from career_coach.api.session_manager import (
    FeedbackTurn,
    InterviewSessionManager,
    QuestionTurn,
    SessionStore,
)
from career_coach.errors import GenerationFailed, MissingField, UnknownSession
from career_coach.prompts import STAGES, QuestionAnswer, Stage
from generation import GenerationError
from generation.generation_config import TOKEN_BUDGETS

from conftest import FakeTextGenerator, run


def start(manager, role="Data Analyst", resume="5 years SQL experience"):
    return run(manager.start_session(role, resume))


# ============================================================================
# start_session
# ============================================================================

def test_start_session_initial_state(manager, generator):
    session = start(manager)

    assert session.current_stage is Stage.BASIC
    assert session.question_count == 1
    assert session.history == []
    assert session.last_question == "Generated text 1"
    assert session.job_role == "Data Analyst"
    assert manager.active_session_count == 1

    assert len(generator.calls) == 1
    assert "Data Analyst" in generator.last_prompt
    assert generator.calls[0]["max_tokens"] == TOKEN_BUDGETS["question"]


def test_start_session_ids_are_unique(manager):
    ids = {start(manager).session_id for _ in range(5)}
    assert len(ids) == 5


@pytest.mark.parametrize("role,resume", [
    ("", "5 years SQL"),
    ("Data Analyst", ""),
    ("   ", "5 years SQL"),
    (None, None),
])
def test_start_session_requires_both_fields(manager, generator, role, resume):
    with pytest.raises(MissingField):
        run(manager.start_session(role, resume))
    assert generator.calls == []
    assert manager.active_session_count == 0


def test_start_session_generation_failure_stores_nothing(manager, generator):
    generator.fail_with = GenerationError("upstream down")
    with pytest.raises(GenerationFailed):
        start(manager)
    assert manager.active_session_count == 0


# ============================================================================
# submit_answer
# ============================================================================

def test_six_answers_walk_every_stage_then_return_feedback(manager, generator):
    session = start(manager)
    sid = session.session_id
    stages_seen = [session.current_stage]

    for n in range(1, len(STAGES)):
        turn = run(manager.submit_answer(sid, f"answer {n}"))
        assert isinstance(turn, QuestionTurn)
        assert turn.question_count == n + 1
        stages_seen.append(turn.stage)

        snapshot = manager.get_session(sid)
        assert len(snapshot.history) == snapshot.question_count - 1
        assert snapshot.current_stage is turn.stage

    assert tuple(stages_seen) == STAGES

    final = run(manager.submit_answer(sid, "answer 6"))
    assert isinstance(final, FeedbackTurn)
    assert generator.calls[-1]["max_tokens"] == TOKEN_BUDGETS["feedback"]
    for n in range(1, 7):
        assert f"Candidate: answer {n}" in generator.last_prompt

    assert manager.active_session_count == 0
    with pytest.raises(UnknownSession):
        manager.get_session(sid)
    with pytest.raises(UnknownSession):
        run(manager.submit_answer(sid, "one more"))
    with pytest.raises(UnknownSession):
        run(manager.clarify_last_question(sid))
    with pytest.raises(UnknownSession):
        run(manager.finish_session(sid))


def test_answer_is_recorded_against_the_question_asked(manager):
    session = start(manager)
    run(manager.submit_answer(session.session_id, "I like data"))

    snapshot = manager.get_session(session.session_id)
    assert snapshot.history == [QuestionAnswer("Generated text 1", "I like data")]
    assert snapshot.last_question == "Generated text 2"


def test_resume_stage_question_uses_resume(manager, generator):
    session = start(manager, resume="Built Tableau dashboards")
    for _ in range(3):
        run(manager.submit_answer(session.session_id, "ok"))

    assert manager.get_session(session.session_id).current_stage is Stage.RESUME
    assert "Built Tableau dashboards" in generator.last_prompt


@pytest.mark.parametrize("answer", ["anything", "", None])
def test_unknown_session_wins_regardless_of_answer(manager, answer):
    with pytest.raises(UnknownSession):
        run(manager.submit_answer("no-such-session", answer))


def test_missing_session_id_is_unknown(manager):
    with pytest.raises(UnknownSession):
        run(manager.submit_answer(None, "answer"))


def test_empty_answer_is_missing_field(manager):
    session = start(manager)
    with pytest.raises(MissingField):
        run(manager.submit_answer(session.session_id, "   "))
    assert manager.get_session(session.session_id).question_count == 1


def test_failed_question_generation_leaves_session_untouched(manager, generator):
    session = start(manager)
    sid = session.session_id
    generator.fail_with = GenerationError("quota exceeded")

    with pytest.raises(GenerationFailed):
        run(manager.submit_answer(sid, "my answer"))

    snapshot = manager.get_session(sid)
    assert snapshot.current_stage is Stage.BASIC
    assert snapshot.question_count == 1
    assert snapshot.history == []
    assert snapshot.last_question == "Generated text 1"

    generator.fail_with = None
    turn = run(manager.submit_answer(sid, "my answer"))
    assert turn.stage is Stage.ROLE
    assert turn.question_count == 2


def test_failed_feedback_keeps_session_for_retry(manager, generator):
    session = start(manager)
    sid = session.session_id
    for _ in range(5):
        run(manager.submit_answer(sid, "ok"))

    generator.fail_with = RuntimeError("connection reset")
    with pytest.raises(GenerationFailed):
        run(manager.submit_answer(sid, "last answer"))

    snapshot = manager.get_session(sid)
    assert snapshot.current_stage is Stage.SALARY
    assert snapshot.question_count == 6
    assert len(snapshot.history) == 5

    generator.fail_with = None
    assert isinstance(run(manager.submit_answer(sid, "last answer")), FeedbackTurn)


def test_empty_generation_is_a_failure(manager, generator):
    session = start(manager)
    generator.responses = ["   "]
    with pytest.raises(GenerationFailed):
        run(manager.submit_answer(session.session_id, "answer"))
    assert manager.get_session(session.session_id).question_count == 1


def test_generation_timeout_is_a_failure(generator):
    manager = InterviewSessionManager(generator=generator, timeout=0.05)
    session = start(manager)
    generator.delay = 1.0

    with pytest.raises(GenerationFailed):
        run(manager.submit_answer(session.session_id, "answer"))
    assert manager.get_session(session.session_id).current_stage is Stage.BASIC


# ============================================================================
# clarify_last_question
# ============================================================================

def test_clarify_only_replaces_last_question(manager, generator):
    session = start(manager)
    sid = session.session_id
    run(manager.submit_answer(sid, "first answer"))
    before = manager.get_session(sid)

    first = run(manager.clarify_last_question(sid))
    second = run(manager.clarify_last_question(sid))

    after = manager.get_session(sid)
    assert first != second
    assert after.last_question == second
    assert after.history == before.history
    assert after.question_count == before.question_count
    assert after.current_stage is before.current_stage
    assert generator.calls[-1]["max_tokens"] == TOKEN_BUDGETS["clarify"]


def test_clarified_question_is_what_gets_recorded(manager):
    session = start(manager)
    sid = session.session_id
    clarified = run(manager.clarify_last_question(sid))
    run(manager.submit_answer(sid, "answer"))

    assert manager.get_session(sid).history[0].question == clarified


def test_clarify_failure_keeps_original_question(manager, generator):
    session = start(manager)
    generator.fail_with = GenerationError("boom")
    with pytest.raises(GenerationFailed):
        run(manager.clarify_last_question(session.session_id))
    assert manager.get_session(session.session_id).last_question == "Generated text 1"


def test_clarify_without_question_is_unknown(manager):
    session = start(manager)
    manager.store.get(session.session_id).last_question = ""
    with pytest.raises(UnknownSession):
        run(manager.clarify_last_question(session.session_id))


# ============================================================================
# finish_session
# ============================================================================

@pytest.mark.parametrize("answers", [0, 2, 5])
def test_finish_from_any_stage_deletes_session(manager, generator, answers):
    session = start(manager)
    sid = session.session_id
    for n in range(answers):
        run(manager.submit_answer(sid, f"answer {n}"))

    feedback = run(manager.finish_session(sid))

    assert feedback
    assert "ended this mock interview early" in generator.last_prompt
    assert generator.calls[-1]["max_tokens"] == TOKEN_BUDGETS["finish"]
    assert manager.active_session_count == 0
    with pytest.raises(UnknownSession):
        run(manager.finish_session(sid))


def test_finish_failure_keeps_session(manager, generator):
    session = start(manager)
    generator.fail_with = GenerationError("boom")
    with pytest.raises(GenerationFailed):
        run(manager.finish_session(session.session_id))
    assert manager.active_session_count == 1


# ============================================================================
# Concurrency
# ============================================================================

def test_concurrent_answers_on_one_session_are_serialized(manager, generator):
    session = start(manager)
    sid = session.session_id

    async def race():
        generator.gate = asyncio.Event()
        first = asyncio.create_task(manager.submit_answer(sid, "answer A"))
        second = asyncio.create_task(manager.submit_answer(sid, "answer B"))
        await asyncio.sleep(0.01)
        generator.gate.set()
        return await asyncio.gather(first, second)

    first, second = run(race())

    assert (first.stage, first.question_count) == (Stage.ROLE, 2)
    assert (second.stage, second.question_count) == (Stage.TECHNICAL, 3)

    snapshot = manager.get_session(sid)
    assert [qa.answer for qa in snapshot.history] == ["answer A", "answer B"]
    assert snapshot.history[1].question == first.question


def test_answer_waiting_behind_finish_sees_unknown_session(manager, generator):
    session = start(manager)
    sid = session.session_id

    async def race():
        generator.gate = asyncio.Event()
        finish = asyncio.create_task(manager.finish_session(sid))
        await asyncio.sleep(0.01)
        answer = asyncio.create_task(manager.submit_answer(sid, "too late"))
        await asyncio.sleep(0.01)
        generator.gate.set()
        return await asyncio.gather(finish, answer, return_exceptions=True)

    feedback, answer_result = run(race())

    assert isinstance(feedback, str)
    assert isinstance(answer_result, UnknownSession)
    assert manager.active_session_count == 0


def test_sessions_are_independent(manager):
    a = start(manager, role="Nurse")
    b = start(manager, role="Pilot")

    run(manager.submit_answer(a.session_id, "answer"))
    run(manager.finish_session(b.session_id))

    snapshot = manager.get_session(a.session_id)
    assert snapshot.current_stage is Stage.ROLE
    assert snapshot.job_role == "Nurse"
    assert manager.active_session_count == 1


# ============================================================================
# Store, snapshots and expiry
# ============================================================================

def test_get_session_returns_a_copy(manager):
    session = start(manager)
    snapshot = manager.get_session(session.session_id)
    snapshot.history.append(QuestionAnswer("q", "a"))
    assert manager.get_session(session.session_id).history == []


def test_managers_do_not_share_sessions():
    one = InterviewSessionManager(generator=FakeTextGenerator(), timeout=5)
    two = InterviewSessionManager(generator=FakeTextGenerator(), timeout=5)
    session = start(one)
    assert one.active_session_count == 1
    assert two.active_session_count == 0
    with pytest.raises(UnknownSession):
        two.get_session(session.session_id)


def test_store_rejects_duplicate_ids(manager):
    session = start(manager)
    with pytest.raises(ValueError):
        manager.store.add(manager.store.get(session.session_id))


def test_store_remove_reports_missing():
    store = SessionStore()
    assert store.remove("missing") is False
    assert len(store) == 0


def test_purge_expired_drops_idle_sessions(generator):
    manager = InterviewSessionManager(generator=generator, timeout=5, idle_ttl_seconds=60)
    stale = start(manager)
    fresh = start(manager)
    manager.store.get(stale.session_id).last_activity = datetime.now() - timedelta(minutes=5)

    assert manager.purge_expired() == 1
    with pytest.raises(UnknownSession):
        manager.get_session(stale.session_id)
    assert manager.get_session(fresh.session_id)


def test_purge_disabled_by_default(manager):
    session = start(manager)
    manager.store.get(session.session_id).last_activity = datetime.now() - timedelta(days=30)
    assert manager.purge_expired() == 0
    assert manager.active_session_count == 1


def test_start_session_sweeps_idle_sessions(generator):
    manager = InterviewSessionManager(generator=generator, timeout=5, idle_ttl_seconds=60)
    stale = start(manager)
    manager.store.get(stale.session_id).last_activity = datetime.now() - timedelta(hours=1)

    start(manager)
    assert manager.active_session_count == 1
