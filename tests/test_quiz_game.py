import pytest
from sqlalchemy import func, select

from app.core import utils
from app.core.errors import Conflict, InternalError, InvalidArgument, NotFound
from app.core.utils import SESSION_ID_ALPHABET
from app.models.quiz_answer import UserAnswer
from app.models.quiz_session import QuizSession
from app.schemas.quiz import OptionUpdate, QuestionCreate, QuizCreate
from app.services import catalog, quiz_game


def _options(quiz, question_index):
    return quiz.questions[question_index].options


async def _session_with_friend(db, quiz, friend="Ana", language="en"):
    created = await quiz_game.create_session(db, quiz.id, "Host", language)
    await quiz_game.add_friend(db, created["unique_id"], friend)
    return created["unique_id"]


async def test_create_session_returns_short_uppercase_id(db, quiz):
    created = await quiz_game.create_session(db, quiz.id, "  Host  ", "en")

    assert len(created["unique_id"]) == 8
    assert set(created["unique_id"]) <= set(SESSION_ID_ALPHABET)
    assert created["quiz_title"] == "Capitals"
    assert created["user_name"] == "Host"
    assert created["language_code"] == "en"


async def test_session_ids_are_unique(db, quiz):
    ids = {(await quiz_game.create_session(db, quiz.id, "Host", "en"))["unique_id"] for _ in range(20)}
    assert len(ids) == 20


async def test_session_id_collision_is_retried(db, quiz, monkeypatch):
    taken = (await quiz_game.create_session(db, quiz.id, "Host", "en"))["unique_id"]
    candidates = iter([taken, "NEWID123"])
    monkeypatch.setattr(utils, "generate_session_token", lambda: next(candidates))

    created = await quiz_game.create_session(db, quiz.id, "Guest", "en")

    assert created["unique_id"] == "NEWID123"


async def test_session_id_allocation_gives_up(db, quiz, monkeypatch):
    taken = (await quiz_game.create_session(db, quiz.id, "Host", "en"))["unique_id"]
    calls = []

    def always_taken():
        calls.append(taken)
        return taken

    monkeypatch.setattr(utils, "generate_session_token", always_taken)

    with pytest.raises(InternalError, match="Could not allocate a unique session id"):
        await quiz_game.create_session(db, quiz.id, "Guest", "en")
    assert len(calls) == utils.MAX_SESSION_ID_ATTEMPTS
    assert await db.scalar(select(func.count(QuizSession.id))) == 1


async def test_create_session_validation(db, quiz):
    with pytest.raises(InvalidArgument):
        await quiz_game.create_session(db, quiz.id, "   ", "en")
    with pytest.raises(NotFound):
        await quiz_game.create_session(db, 9999, "Host", "en")
    with pytest.raises(InvalidArgument):
        await quiz_game.create_session(db, quiz.id, "Host", "zz")


async def test_create_session_rejects_inactive_quiz(db, quiz):
    quiz.is_active = False
    await db.commit()
    with pytest.raises(NotFound):
        await quiz_game.create_session(db, quiz.id, "Host", "en")


async def test_get_session_uses_session_language_without_fallback(db, quiz):
    created = await quiz_game.create_session(db, quiz.id, "Host", "es")

    data = await quiz_game.get_session(db, created["unique_id"])

    assert data["session"]["quiz_title"] == "Capitals"
    questions = data["questions"]
    # inactive questions are not played
    assert [q["order_index"] for q in questions] == [1, 2]
    assert questions[0]["question_text"] == "¿Capital de Francia?"
    assert [o["option_text"] for o in questions[0]["options"]] == ["París", "Roma"]
    # no Spanish translation: null, not English
    assert questions[1]["question_text"] is None
    assert all(o["option_text"] is None for o in questions[1]["options"])


async def test_get_session_unknown_id(db):
    with pytest.raises(NotFound):
        await quiz_game.get_session(db, "NOPE1234")


async def test_add_friend_twice_conflicts_until_removed(db, quiz):
    unique_id = await _session_with_friend(db, quiz)

    with pytest.raises(Conflict):
        await quiz_game.add_friend(db, unique_id, "Ana")

    await quiz_game.remove_friend(db, unique_id, "Ana")
    await quiz_game.add_friend(db, unique_id, "Ana")

    friends = await quiz_game.list_friends(db, unique_id)
    assert [f["friend_name"] for f in friends["friends"]] == ["Ana"]


async def test_save_answer_is_idempotent(db, quiz):
    unique_id = await _session_with_friend(db, quiz)
    question = quiz.questions[0]
    correct = _options(quiz, 0)[0]

    first = await quiz_game.save_answer(db, unique_id, "Ana", question.id, correct.id)
    second = await quiz_game.save_answer(db, unique_id, "Ana", question.id, correct.id)

    assert first is True and second is True
    count = await db.scalar(
        select(func.count(UserAnswer.id)).where(UserAnswer.friend_name == "Ana", UserAnswer.question_id == question.id)
    )
    assert count == 1


async def test_save_answer_overwrites_previous_choice(db, quiz):
    unique_id = await _session_with_friend(db, quiz)
    question = quiz.questions[0]
    right, wrong = _options(quiz, 0)

    assert await quiz_game.save_answer(db, unique_id, "Ana", question.id, right.id) is True
    assert await quiz_game.save_answer(db, unique_id, "Ana", question.id, wrong.id) is False

    scores = await quiz_game.get_friends_scores(db, unique_id)
    assert scores["friends"][0]["total_answers"] == 1
    assert scores["friends"][0]["correct_answers"] == 0


async def test_save_answer_validation(db, quiz):
    unique_id = await _session_with_friend(db, quiz)
    first, second = quiz.questions[0], quiz.questions[1]

    with pytest.raises(InvalidArgument):
        await quiz_game.save_answer(db, unique_id, "Ana", first.id, None)
    with pytest.raises(NotFound, match="Friend not found"):
        await quiz_game.save_answer(db, unique_id, "Stranger", first.id, _options(quiz, 0)[0].id)
    with pytest.raises(NotFound, match="Invalid option"):
        await quiz_game.save_answer(db, unique_id, "Ana", first.id, _options(quiz, 1)[0].id)
    with pytest.raises(NotFound, match="Quiz session not found"):
        await quiz_game.save_answer(db, "MISSING1", "Ana", second.id, _options(quiz, 1)[0].id)


async def test_save_answer_rejects_question_from_other_quiz(db, quiz):
    other = await catalog.create_quiz(db, QuizCreate(title="Other"), None)
    question_id = await catalog.create_question(db, QuestionCreate(
        quiz_id=other.id,
        question_type="text",
        content=[{"language_code": "en", "question_text": "Elsewhere?"}],
        options=[{"is_correct": True, "content": [{"language_code": "en", "option_text": "Yes"}]}],
    ))
    detail = await catalog.get_question(db, question_id)
    unique_id = await _session_with_friend(db, quiz)

    with pytest.raises(NotFound):
        await quiz_game.save_answer(db, unique_id, "Ana", question_id, detail["options"][0]["id"])


async def test_friends_scores_percentages_and_order(db, quiz):
    unique_id = await _session_with_friend(db, quiz, "Zoe")
    await quiz_game.add_friend(db, unique_id, "Ana")
    await quiz_game.add_friend(db, unique_id, "Ben")
    await quiz_game.add_friend(db, unique_id, "Idle")

    q1, q2 = quiz.questions[0], quiz.questions[1]
    paris, rome = _options(quiz, 0)
    two, three, four = _options(quiz, 1)

    # Zoe: 2 of 2 correct
    await quiz_game.save_answer(db, unique_id, "Zoe", q1.id, paris.id)
    await quiz_game.save_answer(db, unique_id, "Zoe", q2.id, three.id)
    # Ana and Ben: 1 of 2
    await quiz_game.save_answer(db, unique_id, "Ana", q1.id, rome.id)
    await quiz_game.save_answer(db, unique_id, "Ana", q2.id, two.id)
    await quiz_game.save_answer(db, unique_id, "Ben", q1.id, paris.id)
    await quiz_game.save_answer(db, unique_id, "Ben", q2.id, four.id)

    scores = await quiz_game.get_friends_scores(db, unique_id)

    assert scores["session"] == {"unique_id": unique_id, "user_name": "Host", "quiz_id": quiz.id}
    by_name = {f["friend_name"]: f for f in scores["friends"]}
    assert by_name["Zoe"]["score_percentage"] == 100
    assert by_name["Ana"]["score_percentage"] == 50
    assert by_name["Idle"] == {"friend_name": "Idle", "total_answers": 0, "correct_answers": 0, "score_percentage": 0}
    assert [f["friend_name"] for f in scores["friends"]] == ["Zoe", "Ana", "Ben", "Idle"]


async def test_score_percentage_rounds_to_two_decimals(db, quiz):
    unique_id = await _session_with_friend(db, quiz)
    question_id = await catalog.create_question(db, QuestionCreate(
        quiz_id=quiz.id,
        question_type="text",
        order_index=4,
        content=[{"language_code": "en", "question_text": "Third?"}],
        options=[{"is_correct": False, "content": [{"language_code": "en", "option_text": "No"}]}],
    ))
    third = await catalog.get_question(db, question_id)

    await quiz_game.save_answer(db, unique_id, "Ana", quiz.questions[0].id, _options(quiz, 0)[0].id)
    await quiz_game.save_answer(db, unique_id, "Ana", quiz.questions[1].id, _options(quiz, 1)[1].id)
    await quiz_game.save_answer(db, unique_id, "Ana", question_id, third["options"][0]["id"])

    scores = await quiz_game.get_friends_scores(db, unique_id)
    ana = scores["friends"][0]
    assert (ana["total_answers"], ana["correct_answers"]) == (3, 2)
    assert ana["score_percentage"] == 66.67


async def test_correctness_is_captured_when_answer_is_saved(db, quiz):
    unique_id = await _session_with_friend(db, quiz)
    question = quiz.questions[0]
    rome = _options(quiz, 0)[1]

    assert await quiz_game.save_answer(db, unique_id, "Ana", question.id, rome.id) is False
    await catalog.update_option(db, rome.id, OptionUpdate(is_correct=True))

    answers = await quiz_game.get_friend_answers(db, unique_id, "Ana")
    assert answers["answers"][0]["is_correct"] is False
    # the correct set reflects the current catalog
    assert [o["id"] for o in answers["answers"][0]["correct_options"]] == [o.id for o in _options(quiz, 0)]


async def test_friend_answers_lists_only_answered_questions(db, quiz):
    unique_id = await _session_with_friend(db, quiz)
    q2 = quiz.questions[1]
    four = _options(quiz, 1)[2]

    await quiz_game.save_answer(db, unique_id, "Ana", q2.id, four.id)
    result = await quiz_game.get_friend_answers(db, unique_id, "Ana")

    assert result["session"] == {"unique_id": unique_id, "user_name": "Host"}
    assert len(result["answers"]) == 1
    answer = result["answers"][0]
    assert answer["question_text"] == "Pick a prime"
    assert answer["selected_option_text"] == "4"
    assert answer["is_correct"] is False
    assert [o["option_text"] for o in answer["correct_options"]] == ["2", "3"]


async def test_remove_friend_clears_answers(db, quiz):
    unique_id = await _session_with_friend(db, quiz)
    await quiz_game.save_answer(db, unique_id, "Ana", quiz.questions[0].id, _options(quiz, 0)[0].id)

    await quiz_game.remove_friend(db, unique_id, "Ana")
    await quiz_game.add_friend(db, unique_id, "Ana")

    scores = await quiz_game.get_friends_scores(db, unique_id)
    assert scores["friends"][0]["total_answers"] == 0
    with pytest.raises(NotFound):
        await quiz_game.remove_friend(db, unique_id, "Nobody")


async def test_friend_names_are_trimmed_everywhere(db, quiz):
    unique_id = await _session_with_friend(db, quiz, " Ana ")
    await quiz_game.save_answer(db, unique_id, "Ana", quiz.questions[0].id, _options(quiz, 0)[0].id)

    answers = await quiz_game.get_friend_answers(db, f" {unique_id} ", "  Ana ")
    assert answers["friend_name"] == "Ana"
    assert len(answers["answers"]) == 1

    await quiz_game.remove_friend(db, unique_id, " Ana  ")
    assert (await quiz_game.list_friends(db, unique_id))["friends"] == []


async def test_deactivated_session_behaves_as_missing(db, quiz):
    unique_id = await _session_with_friend(db, quiz)
    await quiz_game.deactivate_session(db, unique_id)

    with pytest.raises(NotFound):
        await quiz_game.get_friends_scores(db, unique_id)
    assert await quiz_game.list_sessions(db) == []
    session = await db.scalar(select(QuizSession).where(QuizSession.unique_id == unique_id))
    assert session.is_active is False
