"""Интерпретация геотехнических испытаний и расчёт фундаментов.

Модули:
- models: Типы данных (запросы, слои грунта, параметры фундамента, результаты)
- helpers: Общие численные функции (регрессии, интерполяция, коррекция кривой)
- validation: Проверка входных данных
- insitu: Полевые испытания (SPT, CPT)
- lab: Лабораторные испытания (Аттерберг, гранулометрия, уплотнение, CBR)
- foundation: Фундаменты мелкого заложения и свайные
- classification: Классификации и текстовые заключения
- charts: Данные для графиков
- calculator: Организатор расчёта
- storage, config: Хранилище результатов и настройки

Использование:
    from geotech import calculator
    status, response = calculator.run("SPT", {"test_id": "BH1", "data": [...]})
"""

from . import foundation, helpers, insitu, lab
from .errors import GeotechError, InputValidationError, PersistenceError
from .models import ComputedResult, FoundationParameters, SoilLayer, TestType

__all__ = [
    "foundation",
    "helpers",
    "insitu",
    "lab",
    "GeotechError",
    "InputValidationError",
    "PersistenceError",
    "ComputedResult",
    "FoundationParameters",
    "SoilLayer",
    "TestType",
]
