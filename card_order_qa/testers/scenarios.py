"""The canonical acceptance scenarios for the card order form.

Dates are generated when a scenario builds its input, so every run submits a date in the
future relative to that run.
"""
from typing import Iterable, List, Optional

from card_order_qa.data.generator import VALID_PHONE, generate_date, generate_invalid_phone
from card_order_qa.data.structures import FieldError, FieldKey, FormInput, Scenario, Success
from card_order_qa.testers.messages import (
    NAME_FORMAT_ERROR,
    PHONE_FORMAT_ERROR,
    REQUIRED_FIELD_ERROR,
    SUCCESS_MESSAGE,
)

SCENARIOS: List[Scenario] = [
    Scenario(
        name="valid_submission",
        title="Успешная отправка формы с валидными данными",
        build_input=lambda: FormInput(
            city="Москва",
            date=generate_date(3),
            name="Иванов-Петров Иван",
            phone=VALID_PHONE,
            agree=True,
        ),
        expected=Success(message=SUCCESS_MESSAGE),
    ),
    Scenario(
        name="latin_name",
        title="Ошибка при вводе имени латинскими буквами",
        build_input=lambda: FormInput(
            city="Санкт-Петербург",
            date=generate_date(5),
            name="John Smith",
            phone=VALID_PHONE,
            agree=True,
        ),
        expected=FieldError(field=FieldKey.NAME, message=NAME_FORMAT_ERROR),
    ),
    Scenario(
        name="short_phone",
        title="Ошибка при вводе некорректного телефона",
        build_input=lambda: FormInput(
            city="Казань",
            date=generate_date(7),
            name="Сидоров Петр",
            phone=generate_invalid_phone(),
            agree=True,
        ),
        expected=FieldError(field=FieldKey.PHONE, message=PHONE_FORMAT_ERROR),
    ),
    Scenario(
        name="agreement_unchecked",
        title="Ошибка при незаполненном чекбоксе согласия",
        build_input=lambda: FormInput(
            city="Новосибирск",
            date=generate_date(10),
            name="Кузнецова Мария",
            phone=VALID_PHONE,
            agree=False,
        ),
        expected=FieldError(field=FieldKey.AGREEMENT),
    ),
    Scenario(
        name="empty_city",
        title="Ошибка при пустом поле города",
        build_input=lambda: FormInput(
            city="",
            date=generate_date(3),
            name="Федоров Алексей",
            phone=VALID_PHONE,
            agree=True,
        ),
        expected=FieldError(field=FieldKey.CITY, message=REQUIRED_FIELD_ERROR),
    ),
    Scenario(
        name="omitted_city",
        title="Ошибка при нетронутом поле города",
        build_input=lambda: FormInput(
            date=generate_date(3),
            name="Федоров Алексей",
            phone=VALID_PHONE,
            agree=True,
        ),
        expected=FieldError(field=FieldKey.CITY, message=REQUIRED_FIELD_ERROR),
    ),
    Scenario(
        name="empty_name",
        title="Ошибка при пустом поле имени",
        build_input=lambda: FormInput(
            city="Москва",
            date=generate_date(3),
            name="",
            phone=VALID_PHONE,
            agree=True,
        ),
        expected=FieldError(field=FieldKey.NAME, message=REQUIRED_FIELD_ERROR),
    ),
    Scenario(
        name="empty_phone",
        title="Ошибка при пустом поле телефона",
        build_input=lambda: FormInput(
            city="Москва",
            date=generate_date(3),
            name="Иванов Иван",
            phone="",
            agree=True,
        ),
        expected=FieldError(field=FieldKey.PHONE, message=REQUIRED_FIELD_ERROR),
    ),
]


def select_scenarios(patterns: Optional[Iterable[str]] = None) -> List[Scenario]:
    """Return scenarios whose name contains any of ``patterns`` (all when none given)."""
    patterns = [p for p in (patterns or []) if p]
    if not patterns:
        return list(SCENARIOS)
    return [s for s in SCENARIOS if any(p in s.name for p in patterns)]
