# habitquest/services/report_composer.py
from datetime import date
from typing import Iterable, List, Optional

from ..models.goal_model import LifecycleStatus

HASHTAGS = "#мои_цели #отчёт_дня"

COMPLETED_GLYPH = "✅"
PENDING_GLYPH = "❌"

_MONTHS_GENITIVE = [
    "января", "февраля", "марта", "апреля", "мая", "июня",
    "июля", "августа", "сентября", "октября", "ноября", "декабря",
]

# (min ratio, note); first match wins, the "any completed" rung is handled separately
_NOTES_BY_RATIO = [
    (1.0, "🏆 Сегодня я справился со всеми задачами! Отличный день!"),
    (0.8, "💪 Почти всё выполнено, ещё чуть-чуть и будет идеально!"),
    (0.5, "👍 Больше половины задач позади, так держать!"),
]
_SOME_DONE_NOTE = "🌱 Маленькие шаги тоже ведут к большой цели."
_NOTHING_DONE_NOTE = "🔥 Сегодня не получилось, но я не сдаюсь!"


def _field(goal, name: str):
    if isinstance(goal, dict):
        return goal.get(name)
    return getattr(goal, name, None)


def normalize_title(title: Optional[str]) -> str:
    return (title or "").replace("\u00a0", " ").strip()


def format_date_ru(day: date) -> str:
    return f"{day.day} {_MONTHS_GENITIVE[day.month - 1]} {day.year}"


def encouragement(completed: int, total: int) -> str:
    ratio = completed / total if total else 0.0
    for threshold, note in _NOTES_BY_RATIO:
        if ratio >= threshold:
            return note
    if completed > 0:
        return _SOME_DONE_NOTE
    return _NOTHING_DONE_NOTE


def compose_report(goals: Iterable, today: Optional[date] = None) -> str:
    """Daily summary ready to paste into a Telegram message. No I/O."""
    goals = list(goals)
    today = today or date.today()

    completed = sum(1 for g in goals if _field(g, "status") == LifecycleStatus.COMPLETED.value)

    lines: List[str] = []
    for g in goals:
        glyph = COMPLETED_GLYPH if _field(g, "status") == LifecycleStatus.COMPLETED.value else PENDING_GLYPH
        lines.append(f"{glyph} {normalize_title(_field(g, 'title'))}")

    heading = f"📅 Мой день, {format_date_ru(today)}\n{HASHTAGS}"
    message = "\n\n".join([heading, "\n\n".join(lines), encouragement(completed, len(goals))])
    return message.rstrip()
