# src/constellix_client/core/error_handler.py

import json
from typing import Any, FrozenSet, Optional

from .endpoints import Target
from .exceptions import APIError, ChecksAPIError, PrimaryAPIError

PRIMARY_SUCCESS_CODES: FrozenSet[int] = frozenset({200})
CHECKS_SUCCESS_CODES: FrozenSet[int] = frozenset({200, 201, 202})


def extract_primary_errors(body: str) -> Optional[str]:
    """
    Склеивает строки из поля ``errors`` тела ответа основного API.

    Тело проверяется по форме: ожидается JSON объект со списком строк
    в ``errors``. Элементы другого типа пропускаются.

    Returns:
        Склеенное сообщение или None, если тело не той формы

    Examples:
        >>> extract_primary_errors('{"errors": ["bad", "thing"]}')
        'badthing'
        >>> extract_primary_errors('<html>502</html>') is None
        True
    """
    try:
        data = json.loads(body)
    except (TypeError, ValueError):
        return None

    if not isinstance(data, dict):
        return None

    errors = data.get("errors")
    if not isinstance(errors, list):
        return None

    message = "".join(item for item in errors if isinstance(item, str))
    return message or None


class ErrorHandler:
    """Нормализует неуспешные ответы двух API в APIError"""

    @staticmethod
    def check_primary(response: Any) -> None:
        """Основной API: успех только при 200, ошибки в JSON поле ``errors``"""
        status_code = response.status_code
        if status_code in PRIMARY_SUCCESS_CODES:
            return

        message = extract_primary_errors(response.text)
        if message is None:
            message = f"non-OK status {status_code}"

        raise PrimaryAPIError(message, status_code, str(response.url), response=response)

    @staticmethod
    def check_checks(response: Any) -> None:
        """Checks API: успех при 200/201/202, сообщение - тело ответа как есть"""
        status_code = response.status_code
        if status_code in CHECKS_SUCCESS_CODES:
            return

        raise ChecksAPIError(response.text, status_code, str(response.url), response=response)

    @staticmethod
    def check(response: Any, target: Target) -> None:
        """Выбирает политику по классификации endpoint"""
        if target is Target.CHECKS:
            ErrorHandler.check_checks(response)
        else:
            ErrorHandler.check_primary(response)

    @staticmethod
    def is_retryable_error(error: Exception) -> bool:
        """Подсказка для внешнего retry: сам клиент запросы не повторяет"""
        if isinstance(error, APIError):
            return error.retryable
        return bool(getattr(error, "retryable", False))
