"""Copy rendered by the order form, used as oracle values."""

SUCCESS_MESSAGE = "Ваша заявка успешно отправлена! Наш менеджер свяжется с вами в ближайшее время."
NAME_FORMAT_ERROR = "Имя и Фамилия указаные неверно. Допустимы только русские буквы, пробелы и дефисы."
PHONE_FORMAT_ERROR = "Телефон указан неверно. Должно быть 11 цифр, например, +79012345678."
REQUIRED_FIELD_ERROR = "Поле обязательно для заполнения"
