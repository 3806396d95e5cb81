"""Startup seeding: the default admin plus sample languages, pages, content and a quiz.

Each group is skipped when its table already holds rows, so seeding can run on
every start. Translations are only written for languages present in the table.
"""
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.security import get_password_hash
from app.models.content import ContentItem, Page
from app.models.language import Language
from app.models.quiz import Option, OptionContent, Question, QuestionContent, Quiz
from app.models.user import User

logger = logging.getLogger(__name__)

LANGUAGES = [
    ("en", "English", "English", True),
    ("hi", "Hindi", "हिन्दी", False),
    ("ur", "Urdu", "اردو", False),
    ("ar", "Arabic", "العربية", False),
    ("es", "Spanish", "Español", False),
    ("fr", "French", "Français", False),
]

PAGES = [
    ("home", "Home Page", "Main landing page"),
    ("about", "About Us", "About our company"),
    ("contact", "Contact Us", "Get in touch with us"),
    ("services", "Our Services", "Services we offer"),
    ("products", "Products", "Our product catalog"),
]

CONTENT = [
    ("home", "hero", "title", {
        "en": "Welcome to Our Platform",
        "hi": "हमारे प्लेटफॉर्म में आपका स्वागत है",
        "ur": "ہمارے پلیٹ فارم میں خوش آمدید",
    }),
    ("home", "hero", "subtitle", {
        "en": "Build amazing things with our tools",
        "hi": "हमारे उपकरणों से अद्भुत चीजें बनाएं",
        "ur": "ہمارے ٹولز کے ساتھ حیرت انگیز چیزیں بنائیں",
    }),
    ("about", "main", "title", {
        "en": "About Our Company",
        "hi": "हमारी कंपनी के बारे में",
        "ur": "ہماری کمپنی کے بارے میں",
    }),
    ("contact", "form", "title", {
        "en": "Get In Touch",
        "hi": "संपर्क में रहें",
        "ur": "رابطے میں رہیں",
    }),
]

SAMPLE_QUIZ = {
    "title": "General Knowledge Quiz",
    "description": "Test your general knowledge",
    "questions": [
        {
            "question_type": "text",
            "content": {
                "en": ("What is the capital of France?", "Paris is the capital and largest city of France."),
                "hi": ("फ्रांस की राजधानी क्या है?", "पेरिस फ्रांस की राजधानी और सबसे बड़ा शहर है।"),
                "ur": ("فرانس کا دارالحکومت کیا ہے؟", "پیرس فرانس کا دارالحکومت اور سب سے بڑا شہر ہے۔"),
            },
            "options": [
                (True, {"en": "Paris", "hi": "पेरिस", "ur": "پیرس"}),
                (False, {"en": "London", "hi": "लंदन", "ur": "لندن"}),
                (False, {"en": "Berlin", "hi": "बर्लिन", "ur": "برلن"}),
                (False, {"en": "Madrid", "hi": "मैड्रिड", "ur": "میڈرڈ"}),
            ],
        },
        {
            "question_type": "media",
            "content": {
                "en": ("Which planet is known as the Red Planet?",
                       "Mars is known as the Red Planet due to its reddish appearance."),
                "hi": ("किस ग्रह को लाल ग्रह के रूप में जाना जाता है?",
                       "मंगल ग्रह को इसकी लाल रंग की उपस्थिति के कारण लाल ग्रह के रूप में जाना जाता है।"),
                "ur": ("کون سا سیارہ سرخ سیارہ کے نام سے جانا جاتا ہے؟",
                       "مریخ کو اس کی سرخ رنگت کی وجہ سے سرخ سیارہ کہا جاتا ہے۔"),
            },
            "options": [
                (True, {"en": "Mars", "hi": "मंगल", "ur": "مریخ"}),
                (False, {"en": "Venus", "hi": "शुक्र", "ur": "زہرہ"}),
                (False, {"en": "Jupiter", "hi": "बृहस्पति", "ur": "مشتری"}),
                (False, {"en": "Saturn", "hi": "शनि", "ur": "زحل"}),
            ],
        },
    ],
}


async def _is_empty(db: AsyncSession, column) -> bool:
    return not await db.scalar(select(func.count(column)))


async def seed_admin(db: AsyncSession) -> User:
    result = await db.execute(select(User).where(User.role == "admin").order_by(User.id))
    admin = result.scalars().first()
    if admin is None:
        admin = User(
            username=settings.ADMIN_USERNAME,
            email=settings.ADMIN_EMAIL,
            password=get_password_hash(settings.ADMIN_PASSWORD),
            role="admin",
        )
        db.add(admin)
        await db.flush()
        logger.info("Default admin user %s created", admin.username)
    return admin


async def seed_languages(db: AsyncSession) -> None:
    if not await _is_empty(db, Language.id):
        return
    db.add_all(
        Language(code=code, name=name, native_name=native, is_default=is_default)
        for code, name, native, is_default in LANGUAGES
    )
    await db.flush()


async def seed_pages(db: AsyncSession) -> None:
    if not await _is_empty(db, Page.id):
        return
    db.add_all(Page(slug=slug, title=title, description=description) for slug, title, description in PAGES)
    await db.flush()


async def _language_codes(db: AsyncSession) -> set:
    return set((await db.execute(select(Language.code))).scalars().all())


async def seed_content(db: AsyncSession) -> None:
    if not await _is_empty(db, ContentItem.id):
        return
    known = await _language_codes(db)
    for page, section, key, translations in CONTENT:
        db.add_all(
            ContentItem(page=page, section=section, key=key, language_code=code, content=text)
            for code, text in translations.items()
            if code in known
        )
    await db.flush()


async def seed_quiz(db: AsyncSession, created_by: int | None) -> None:
    if not await _is_empty(db, Quiz.id):
        return
    known = await _language_codes(db)

    quiz = Quiz(title=SAMPLE_QUIZ["title"], description=SAMPLE_QUIZ["description"], created_by=created_by)
    for order, entry in enumerate(SAMPLE_QUIZ["questions"], start=1):
        question = Question(question_type=entry["question_type"], order_index=order)
        question.contents = [
            QuestionContent(language_code=code, question_text=text, explanation=explanation)
            for code, (text, explanation) in entry["content"].items()
            if code in known
        ]
        for option_order, (is_correct, texts) in enumerate(entry["options"], start=1):
            option = Option(order_index=option_order, is_correct=is_correct)
            option.contents = [
                OptionContent(language_code=code, option_text=text) for code, text in texts.items() if code in known
            ]
            question.options.append(option)
        quiz.questions.append(question)

    db.add(quiz)
    await db.flush()


async def seed_database(db: AsyncSession, sample_data: bool = True) -> None:
    try:
        admin = await seed_admin(db)
        if sample_data:
            await seed_languages(db)
            await seed_pages(db)
            await seed_content(db)
            await seed_quiz(db, admin.id)
        await db.commit()
    except Exception:
        await db.rollback()
        logger.exception("Seeding failed")
        raise
