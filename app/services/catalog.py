"""Quizzes, questions and options with their per-language translations."""
import logging
from typing import List

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.errors import InvalidArgument, NotFound
from app.db.base_class import utcnow
from app.models.quiz import Option, OptionContent, Question, QuestionContent, Quiz
from app.models.user import User
from app.schemas.quiz import OptionIn, OptionUpdate, QuestionContentIn, QuestionCreate, QuestionUpdate, QuizCreate, QuizUpdate
from app.services.languages import find_invalid_codes

logger = logging.getLogger(__name__)


# --- Quizzes ---

def _quiz_row(quiz: Quiz, created_by_name) -> dict:
    return {
        "id": quiz.id,
        "title": quiz.title,
        "description": quiz.description,
        "is_active": quiz.is_active,
        "created_by": quiz.created_by,
        "created_by_name": created_by_name,
        "created_at": quiz.created_at,
        "updated_at": quiz.updated_at,
    }


async def list_quizzes(db: AsyncSession) -> List[dict]:
    result = await db.execute(
        select(Quiz, User.username)
        .outerjoin(User, User.id == Quiz.created_by)
        .order_by(Quiz.created_at.desc(), Quiz.id.desc())
    )
    return [_quiz_row(quiz, username) for quiz, username in result.all()]


def _question_tree(question: Question) -> dict:
    return {
        "id": question.id,
        "quiz_id": question.quiz_id,
        "question_type": question.question_type,
        "order_index": question.order_index,
        "is_active": question.is_active,
        "content": {
            c.language_code: {
                "question_text": c.question_text,
                "media_url": c.media_url,
                "explanation": c.explanation,
            }
            for c in question.contents
        },
        "options": [
            {
                "id": o.id,
                "order_index": o.order_index,
                "is_correct": o.is_correct,
                "is_active": o.is_active,
                "content": {
                    oc.language_code: {"option_text": oc.option_text, "media_url": oc.media_url}
                    for oc in o.contents
                },
            }
            for o in question.options
        ],
    }


async def get_quiz_tree(db: AsyncSession, quiz_id: int) -> dict:
    """Quiz with every question, translation and option, ordered by ``order_index``."""
    result = await db.execute(
        select(Quiz, User.username)
        .outerjoin(User, User.id == Quiz.created_by)
        .where(Quiz.id == quiz_id)
        .options(
            selectinload(Quiz.questions).selectinload(Question.contents),
            selectinload(Quiz.questions).selectinload(Question.options).selectinload(Option.contents),
        )
    )
    row = result.one_or_none()
    if row is None:
        raise NotFound("Quiz not found")

    quiz, username = row
    data = _quiz_row(quiz, username)
    data["questions"] = [_question_tree(q) for q in quiz.questions]
    return data


async def create_quiz(db: AsyncSession, data: QuizCreate, created_by: int | None) -> Quiz:
    quiz = Quiz(title=data.title, description=data.description, created_by=created_by)
    db.add(quiz)
    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    logger.info("Quiz %d created: %s", quiz.id, quiz.title)
    return quiz


async def update_quiz(db: AsyncSession, quiz_id: int, data: QuizUpdate) -> None:
    changes = data.model_dump(exclude_unset=True)
    if not changes:
        raise InvalidArgument("No fields to update")

    changes["updated_at"] = utcnow()
    result = await db.execute(
        update(Quiz).where(Quiz.id == quiz_id).values(**changes).execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        await db.rollback()
        raise NotFound("Quiz not found")
    await db.commit()


async def delete_quiz(db: AsyncSession, quiz_id: int) -> None:
    result = await db.execute(delete(Quiz).where(Quiz.id == quiz_id))
    if result.rowcount == 0:
        raise NotFound("Quiz not found")
    await db.commit()
    logger.info("Quiz %d deleted", quiz_id)


# --- Questions ---

def _check_unique_codes(codes: List[str], owner: str) -> None:
    duplicates = sorted({code for code in codes if codes.count(code) > 1})
    if duplicates:
        raise InvalidArgument(f"Duplicate {owner} content language codes: {', '.join(duplicates)}")


async def _check_languages(db: AsyncSession, content: List[QuestionContentIn] | None, options: List[OptionIn] | None) -> None:
    codes = [c.language_code for c in content or []]
    _check_unique_codes(codes, "question")
    for option in options or []:
        option_codes = [oc.language_code for oc in option.content]
        _check_unique_codes(option_codes, "option")
        codes.extend(option_codes)
    invalid = await find_invalid_codes(db, codes)
    if invalid:
        raise InvalidArgument(f"Invalid or inactive language codes: {', '.join(invalid)}")


def _add_contents(db: AsyncSession, question_id: int, content: List[QuestionContentIn]) -> None:
    db.add_all(
        QuestionContent(
            question_id=question_id,
            language_code=c.language_code,
            question_text=c.question_text,
            media_url=c.media_url or None,
            explanation=c.explanation or None,
        )
        for c in content
    )


async def _add_options(db: AsyncSession, question_id: int, options: List[OptionIn]) -> None:
    for option_in in options:
        option = Option(question_id=question_id, order_index=option_in.order_index, is_correct=option_in.is_correct)
        db.add(option)
        await db.flush()  # option.id

        db.add_all(
            OptionContent(
                option_id=option.id,
                language_code=oc.language_code,
                option_text=oc.option_text,
                media_url=oc.media_url or None,
            )
            for oc in option_in.content
        )


async def create_question(db: AsyncSession, data: QuestionCreate) -> int:
    """Insert a question with its translations, options and option translations in one transaction."""
    quiz_exists = await db.scalar(select(Quiz.id).where(Quiz.id == data.quiz_id))
    if quiz_exists is None:
        raise NotFound("Quiz not found")
    await _check_languages(db, data.content, data.options)

    try:
        question = Question(
            quiz_id=data.quiz_id,
            question_type=data.question_type,
            order_index=data.order_index,
        )
        db.add(question)
        await db.flush()  # question.id

        _add_contents(db, question.id, data.content)
        await _add_options(db, question.id, data.options)
        await db.flush()
        await db.commit()
    except Exception:
        await db.rollback()
        logger.exception("Question create rolled back for quiz %d", data.quiz_id)
        raise

    logger.info("Question %d created in quiz %d with %d options", question.id, data.quiz_id, len(data.options))
    return question.id


async def update_question(db: AsyncSession, question_id: int, data: QuestionUpdate) -> None:
    """Partial update; ``content`` and ``options`` each replace their whole sub-collection."""
    exists = await db.scalar(select(Question.id).where(Question.id == question_id))
    if exists is None:
        raise NotFound("Question not found")
    await _check_languages(db, data.content, data.options)

    fields = data.model_dump(exclude_unset=True, include={"question_type", "order_index", "is_active"})
    try:
        if fields:
            fields["updated_at"] = utcnow()
            await db.execute(
                update(Question)
                .where(Question.id == question_id)
                .values(**fields)
                .execution_options(synchronize_session=False)
            )

        if data.content is not None:
            await db.execute(delete(QuestionContent).where(QuestionContent.question_id == question_id))
            _add_contents(db, question_id, data.content)
            await db.flush()

        if data.options is not None:
            option_ids = select(Option.id).where(Option.question_id == question_id)
            await db.execute(delete(OptionContent).where(OptionContent.option_id.in_(option_ids)))
            await db.execute(delete(Option).where(Option.question_id == question_id))
            await _add_options(db, question_id, data.options)
            await db.flush()

        await db.commit()
    except Exception:
        await db.rollback()
        logger.exception("Question %d update rolled back", question_id)
        raise


async def get_question(db: AsyncSession, question_id: int) -> dict:
    result = await db.execute(
        select(Question, Quiz.title)
        .join(Quiz, Quiz.id == Question.quiz_id)
        .where(Question.id == question_id)
        .options(
            selectinload(Question.contents),
            selectinload(Question.options).selectinload(Option.contents),
        )
    )
    row = result.one_or_none()
    if row is None:
        raise NotFound("Question not found")

    question, quiz_title = row
    data = _question_tree(question)
    data["quiz_title"] = quiz_title
    data["created_at"] = question.created_at
    data["updated_at"] = question.updated_at
    return data


async def delete_question(db: AsyncSession, question_id: int) -> None:
    result = await db.execute(delete(Question).where(Question.id == question_id))
    if result.rowcount == 0:
        raise NotFound("Question not found")
    await db.commit()


# --- Options ---

async def update_option(db: AsyncSession, option_id: int, data: OptionUpdate) -> None:
    """Edit one option in place. Answers already saved keep the correctness they captured."""
    changes = data.model_dump(exclude_unset=True)
    if not changes:
        raise InvalidArgument("No fields to update")

    changes["updated_at"] = utcnow()
    result = await db.execute(
        update(Option).where(Option.id == option_id).values(**changes).execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        await db.rollback()
        raise NotFound("Option not found")
    await db.commit()


async def delete_option(db: AsyncSession, option_id: int) -> None:
    result = await db.execute(delete(Option).where(Option.id == option_id))
    if result.rowcount == 0:
        raise NotFound("Option not found")
    await db.commit()

