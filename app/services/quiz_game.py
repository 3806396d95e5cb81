"""Quiz sessions, the friends playing them, their answers and scores.

A session is addressed by its public ``unique_id``. Inactive sessions and
inactive friends behave exactly like missing ones.
"""
import logging
from typing import List, Optional

from sqlalchemy import case, delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import Conflict, InvalidArgument, NotFound
from app.core.utils import generate_unique_session_id
from app.db.base_class import utcnow
from app.models.quiz import Option, OptionContent, Question, QuestionContent, Quiz
from app.models.quiz_answer import UserAnswer
from app.models.quiz_friend import QuizFriend
from app.models.quiz_session import QuizSession
from app.services.languages import get_active_language

logger = logging.getLogger(__name__)


def _clean(value: Optional[str]) -> str:
    return value.strip() if isinstance(value, str) else ""


async def _get_active_session(db: AsyncSession, unique_id: str) -> QuizSession:
    result = await db.execute(
        select(QuizSession).where(QuizSession.unique_id == unique_id, QuizSession.is_active.is_(True))
    )
    session = result.scalar_one_or_none()
    if session is None:
        raise NotFound("Quiz session not found")
    return session


async def _get_active_friend(db: AsyncSession, session_id: int, friend_name: str) -> QuizFriend | None:
    result = await db.execute(
        select(QuizFriend).where(
            QuizFriend.session_id == session_id,
            QuizFriend.friend_name == friend_name,
            QuizFriend.is_active.is_(True),
        )
    )
    return result.scalars().first()


def _session_row(session: QuizSession, quiz_title: str, quiz_description: Optional[str]) -> dict:
    return {
        "id": session.id,
        "quiz_id": session.quiz_id,
        "unique_id": session.unique_id,
        "user_name": session.user_name,
        "language_code": session.language_code,
        "is_active": session.is_active,
        "created_at": session.created_at,
        "quiz_title": quiz_title,
        "quiz_description": quiz_description,
    }


async def create_session(db: AsyncSession, quiz_id: Optional[int], user_name: Optional[str], language_code: Optional[str]) -> dict:
    user_name = _clean(user_name)
    language_code = _clean(language_code)
    if not quiz_id or not user_name or not language_code:
        raise InvalidArgument("Quiz ID, user name, and language code are required")

    quiz = await db.scalar(select(Quiz).where(Quiz.id == quiz_id, Quiz.is_active.is_(True)))
    if quiz is None:
        raise NotFound("Quiz not found")
    if await get_active_language(db, language_code) is None:
        raise InvalidArgument("Language not found or inactive")

    unique_id = await generate_unique_session_id(db)
    session = QuizSession(
        quiz_id=quiz.id,
        unique_id=unique_id,
        user_name=user_name,
        language_code=language_code,
    )
    db.add(session)
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info("Quiz session %s created for quiz %d by %s (%s)", unique_id, quiz.id, user_name, language_code)
    return {
        "session_id": session.id,
        "unique_id": unique_id,
        "quiz_title": quiz.title,
        "user_name": user_name,
        "language_code": language_code,
    }


async def get_session(db: AsyncSession, unique_id: str) -> dict:
    """The session with its active questions and options in the session's language.

    Missing translations come back as ``None``; there is no fallback to the
    default language.
    """
    result = await db.execute(
        select(QuizSession, Quiz.title, Quiz.description)
        .join(Quiz, Quiz.id == QuizSession.quiz_id)
        .where(QuizSession.unique_id == unique_id, QuizSession.is_active.is_(True))
    )
    row = result.one_or_none()
    if row is None:
        raise NotFound("Quiz session not found")
    session, quiz_title, quiz_description = row
    lang = session.language_code

    question_rows = await db.execute(
        select(
            Question,
            QuestionContent.question_text,
            QuestionContent.media_url,
            QuestionContent.explanation,
        )
        .outerjoin(
            QuestionContent,
            (QuestionContent.question_id == Question.id) & (QuestionContent.language_code == lang),
        )
        .where(Question.quiz_id == session.quiz_id, Question.is_active.is_(True))
        .order_by(Question.order_index, Question.id)
    )
    questions = [
        {
            "id": question.id,
            "question_type": question.question_type,
            "order_index": question.order_index,
            "question_text": text,
            "media_url": media_url,
            "explanation": explanation,
            "options": [],
        }
        for question, text, media_url, explanation in question_rows.all()
    ]

    if questions:
        by_id = {q["id"]: q for q in questions}
        option_rows = await db.execute(
            select(Option, OptionContent.option_text, OptionContent.media_url)
            .outerjoin(
                OptionContent,
                (OptionContent.option_id == Option.id) & (OptionContent.language_code == lang),
            )
            .where(Option.question_id.in_(by_id.keys()), Option.is_active.is_(True))
            .order_by(Option.order_index, Option.id)
        )
        for option, text, media_url in option_rows.all():
            by_id[option.question_id]["options"].append({
                "id": option.id,
                "is_correct": option.is_correct,
                "order_index": option.order_index,
                "option_text": text,
                "media_url": media_url,
            })

    return {
        "session": _session_row(session, quiz_title, quiz_description),
        "questions": questions,
    }


async def add_friend(db: AsyncSession, unique_id: Optional[str], friend_name: Optional[str]) -> QuizFriend:
    unique_id = _clean(unique_id)
    friend_name = _clean(friend_name)
    if not unique_id or not friend_name:
        raise InvalidArgument("Unique ID and friend name are required")

    session = await _get_active_session(db, unique_id)
    if await _get_active_friend(db, session.id, friend_name) is not None:
        raise Conflict("Friend already added to this quiz")

    friend = QuizFriend(session_id=session.id, friend_name=friend_name)
    db.add(friend)
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info("Friend %s joined session %s", friend_name, unique_id)
    return friend


async def remove_friend(db: AsyncSession, unique_id: str, friend_name: str) -> None:
    """Deactivate a friend and drop their answers so a re-add starts clean."""
    unique_id = _clean(unique_id)
    friend_name = _clean(friend_name)
    session = await _get_active_session(db, unique_id)
    friend = await _get_active_friend(db, session.id, friend_name)
    if friend is None:
        raise NotFound("Friend not found in this quiz session")

    try:
        await db.execute(
            update(QuizFriend)
            .where(
                QuizFriend.session_id == session.id,
                QuizFriend.friend_name == friend_name,
                QuizFriend.is_active.is_(True),
            )
            .values(is_active=False)
            .execution_options(synchronize_session=False)
        )
        await db.execute(
            delete(UserAnswer).where(UserAnswer.session_id == session.id, UserAnswer.friend_name == friend_name)
        )
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info("Friend %s removed from session %s", friend_name, unique_id)


async def save_answer(
    db: AsyncSession,
    unique_id: Optional[str],
    friend_name: Optional[str],
    question_id: Optional[int],
    selected_option_id: Optional[int],
) -> bool:
    """Record a friend's answer, replacing any earlier one for the same question.

    Correctness is taken from the selected option's flag at this moment and
    stored with the answer.
    """
    unique_id = _clean(unique_id)
    friend_name = _clean(friend_name)
    if not unique_id or not friend_name or not question_id or not selected_option_id:
        raise InvalidArgument("All fields are required")

    session = await _get_active_session(db, unique_id)
    if await _get_active_friend(db, session.id, friend_name) is None:
        raise NotFound("Friend not found in this quiz session")

    question = await db.scalar(
        select(Question.id).where(Question.id == question_id, Question.quiz_id == session.quiz_id)
    )
    if question is None:
        raise NotFound("Question not found in this quiz")

    option = await db.scalar(
        select(Option).where(Option.id == selected_option_id, Option.question_id == question_id)
    )
    if option is None:
        raise NotFound("Invalid option for this question")
    is_correct = bool(option.is_correct)

    stmt = select(UserAnswer).where(
        UserAnswer.session_id == session.id,
        UserAnswer.friend_name == friend_name,
        UserAnswer.question_id == question_id,
    )
    try:
        existing = await db.scalar(stmt)
        if existing is None:
            answer = UserAnswer(
                session_id=session.id,
                friend_name=friend_name,
                question_id=question_id,
                selected_option_id=selected_option_id,
                is_correct=is_correct,
            )
            try:
                async with db.begin_nested():
                    db.add(answer)
            except IntegrityError:
                # a concurrent save for the same question landed first
                existing = await db.scalar(stmt)

        if existing is not None:
            existing.selected_option_id = selected_option_id
            existing.is_correct = is_correct
            existing.answered_at = utcnow()

        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.debug(
        "Answer saved in %s: %s q%d -> option %d (%s)",
        unique_id, friend_name, question_id, selected_option_id, "correct" if is_correct else "wrong",
    )
    return is_correct


async def get_friends_scores(db: AsyncSession, unique_id: str) -> dict:
    """Per-friend totals for every active friend, best score first."""
    session = await _get_active_session(db, unique_id)

    correct = func.coalesce(func.sum(case((UserAnswer.is_correct.is_(True), 1), else_=0)), 0)
    result = await db.execute(
        select(
            QuizFriend.friend_name,
            func.count(UserAnswer.id).label("total_answers"),
            correct.label("correct_answers"),
        )
        .outerjoin(
            UserAnswer,
            (UserAnswer.session_id == QuizFriend.session_id) & (UserAnswer.friend_name == QuizFriend.friend_name),
        )
        .where(QuizFriend.session_id == session.id, QuizFriend.is_active.is_(True))
        .group_by(QuizFriend.friend_name)
    )

    friends = []
    for friend_name, total, correct_count in result.all():
        total = int(total or 0)
        correct_count = int(correct_count or 0)
        friends.append({
            "friend_name": friend_name,
            "total_answers": total,
            "correct_answers": correct_count,
            "score_percentage": round(correct_count * 100 / total, 2) if total > 0 else 0,
        })
    friends.sort(key=lambda f: (-f["score_percentage"], f["friend_name"]))

    return {
        "session": {
            "unique_id": session.unique_id,
            "user_name": session.user_name,
            "quiz_id": session.quiz_id,
        },
        "friends": friends,
    }


async def get_friend_answers(db: AsyncSession, unique_id: str, friend_name: str) -> dict:
    """One row per answered question, with the question's correct options attached."""
    unique_id = _clean(unique_id)
    friend_name = _clean(friend_name)
    session = await _get_active_session(db, unique_id)
    lang = session.language_code

    result = await db.execute(
        select(
            UserAnswer,
            Question.question_type,
            Question.order_index,
            QuestionContent.question_text,
            QuestionContent.media_url,
            QuestionContent.explanation,
            OptionContent.option_text,
            OptionContent.media_url,
        )
        .join(Question, Question.id == UserAnswer.question_id)
        .outerjoin(
            QuestionContent,
            (QuestionContent.question_id == Question.id) & (QuestionContent.language_code == lang),
        )
        .outerjoin(
            OptionContent,
            (OptionContent.option_id == UserAnswer.selected_option_id) & (OptionContent.language_code == lang),
        )
        .where(UserAnswer.session_id == session.id, UserAnswer.friend_name == friend_name)
        .order_by(Question.order_index, Question.id)
    )
    rows = result.all()

    correct_by_question = {}
    question_ids = [row[0].question_id for row in rows]
    if question_ids:
        correct_rows = await db.execute(
            select(Option.id, Option.question_id, OptionContent.option_text, OptionContent.media_url)
            .outerjoin(
                OptionContent,
                (OptionContent.option_id == Option.id) & (OptionContent.language_code == lang),
            )
            .where(
                Option.question_id.in_(question_ids),
                Option.is_correct.is_(True),
                Option.is_active.is_(True),
            )
            .order_by(Option.order_index, Option.id)
        )
        for option_id, question_id, text, media_url in correct_rows.all():
            correct_by_question.setdefault(question_id, []).append(
                {"id": option_id, "option_text": text, "media_url": media_url}
            )

    answers = []
    for answer, question_type, order_index, q_text, q_media, explanation, o_text, o_media in rows:
        answers.append({
            "question_id": answer.question_id,
            "question_type": question_type,
            "order_index": order_index,
            "question_text": q_text,
            "question_media": q_media,
            "explanation": explanation,
            "selected_option_id": answer.selected_option_id,
            "selected_option_text": o_text,
            "selected_option_media": o_media,
            "is_correct": answer.is_correct,
            "answered_at": answer.answered_at,
            "correct_options": correct_by_question.get(answer.question_id, []),
        })

    return {
        "session": {"unique_id": session.unique_id, "user_name": session.user_name},
        "friend_name": friend_name,
        "answers": answers,
    }


async def list_friends(db: AsyncSession, unique_id: str) -> dict:
    session = await _get_active_session(db, unique_id)
    result = await db.execute(
        select(QuizFriend.friend_name, QuizFriend.created_at)
        .where(QuizFriend.session_id == session.id, QuizFriend.is_active.is_(True))
        .order_by(QuizFriend.created_at.asc(), QuizFriend.id.asc())
    )
    return {
        "session": {"unique_id": session.unique_id, "user_name": session.user_name},
        "friends": [{"friend_name": name, "created_at": created_at} for name, created_at in result.all()],
    }


async def list_sessions(db: AsyncSession) -> List[dict]:
    result = await db.execute(
        select(QuizSession, Quiz.title, Quiz.description)
        .join(Quiz, Quiz.id == QuizSession.quiz_id)
        .where(QuizSession.is_active.is_(True))
        .order_by(QuizSession.created_at.desc(), QuizSession.id.desc())
    )
    return [_session_row(session, title, description) for session, title, description in result.all()]


async def deactivate_session(db: AsyncSession, unique_id: str) -> None:
    session = await _get_active_session(db, unique_id)
    session.is_active = False
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    logger.info("Quiz session %s deactivated", unique_id)
