"""Утилиты: маскирование секретов для логов, сериализация тела запроса."""
