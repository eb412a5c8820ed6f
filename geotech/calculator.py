"""Организатор расчёта: запрос → проверка → расчёт → сохранение → ответ."""

import logging
from typing import Any

from pydantic import ValidationError

from geotech import validation
from geotech.errors import InputValidationError, PersistenceError
from geotech.foundation import pile, shallow
from geotech.insitu import cpt, spt
from geotech.lab import atterberg, cbr, compaction, psd
from geotech.models import ComputedResult, FoundationRequest, TestRequest, TestType
from geotech.storage import NullStore, ResultStore

logger = logging.getLogger(__name__)

# Вид расчёта в URL → TestType
KINDS = {
    "spt": TestType.SPT,
    "cpt": TestType.CPT,
    "atterberg": TestType.ATTERBERG,
    "psd": TestType.PSD,
    "compaction": TestType.COMPACTION,
    "cbr": TestType.CBR,
    "foundation-shallow": TestType.SHALLOW_FOUNDATION,
    "foundation-pile": TestType.PILE_FOUNDATION,
}

INTERNAL_ERROR = "Internal server error"
STORE_FAILED = "Result could not be stored - computation is unaffected"


def compute_test(test_type: TestType, request: TestRequest) -> ComputedResult:
    """Проверка и интерпретация результатов испытания."""
    payload = request.payload
    if payload is None:
        raise InputValidationError("Missing required field: data")

    if test_type == TestType.SPT:
        readings, corrections = validation.validate_spt(payload, request.corrections)
        return spt.interpret(readings, corrections)
    if test_type == TestType.CPT:
        return cpt.interpret(validation.validate_cpt(payload))
    if test_type == TestType.ATTERBERG:
        return atterberg.interpret(validation.validate_atterberg(payload))
    if test_type == TestType.PSD:
        return psd.interpret(validation.validate_psd(payload))
    if test_type == TestType.COMPACTION:
        points, field_density, method = validation.validate_compaction(payload, request.metadata)
        return compaction.interpret(points, field_density, method)
    if test_type == TestType.CBR:
        condition = (request.metadata or {}).get("test_condition")
        return cbr.interpret(validation.validate_cbr(payload), condition)
    raise ValueError(f"Unsupported test type: {test_type}")


def compute_foundation(test_type: TestType, request: FoundationRequest) -> ComputedResult:
    """Проверка параметров и расчёт фундамента."""
    if test_type == TestType.SHALLOW_FOUNDATION:
        return shallow.analyse(validation.validate_foundation(request.parameters, "shallow"))
    return pile.analyse(validation.validate_foundation(request.parameters, "deep"))


def _parse_envelope(model, body: Any):
    if not isinstance(body, dict):
        raise InputValidationError("Request body must be a JSON object")
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        raise InputValidationError(validation.format_error(exc)) from exc


def _persist(store: ResultStore, record: dict[str, Any]) -> str | None:
    """Запись результата. Returns: текст предупреждения при ошибке."""
    try:
        store.save(record)
    except PersistenceError as exc:
        logger.error("Failed to store result %s: %s", record["test_id"], exc)
        return STORE_FAILED
    except Exception:
        # Хранилище внешнее: любая его ошибка не отменяет расчёт
        logger.exception("Unexpected store error for result %s", record["test_id"])
        return STORE_FAILED
    return None


def run(test_type: TestType | str, body: Any, store: ResultStore | None = None) -> tuple[int, dict]:
    """Обработка одного запроса.

    Args:
        test_type: Вид испытания/расчёта.
        body: Разобранное JSON-тело запроса.
        store: Хранилище результатов (по умолчанию NullStore).

    Returns:
        (HTTP-статус, тело ответа)
    """
    store = store or NullStore()
    try:
        test_type = TestType(test_type)
        if test_type.is_foundation:
            request = _parse_envelope(FoundationRequest, body)
            result = compute_foundation(test_type, request)
            record_id = request.record_id
            raw = request.parameters
            extra = {}
        else:
            request = _parse_envelope(TestRequest, body)
            if request.data is None and request.raw_data is not None:
                logger.warning("%s request %s uses deprecated field 'raw_data'", test_type.value, request.test_id)
            result = compute_test(test_type, request)
            record_id = request.test_id
            raw = request.payload
            extra = {"corrections": request.corrections, "metadata": request.metadata}

        warnings = list(result.warnings)
        if request.units == "imperial":
            warnings.append("Imperial units are not converted - inputs are interpreted as metric")

        if request.store:
            if record_id:
                warning = _persist(
                    store,
                    {
                        "test_id": record_id,
                        "test_type": test_type.value,
                        "computed_data": result.computed_data,
                        "raw_data": raw,
                        "metadata": {
                            **extra,
                            "units": request.units,
                            "standard": result.standard,
                            "classifications": list(result.classifications),
                            "warnings": list(warnings),
                        },
                    },
                )
                if warning:
                    warnings.append(warning)
            else:
                warnings.append("Result not stored - test_id is required")

        if len(warnings) != len(result.warnings):
            result = result.model_copy(update={"warnings": tuple(warnings)})

    except InputValidationError as exc:
        logger.info("%s request rejected: %s", test_type, exc.message)
        return 400, {"status": "error", "message": exc.message}
    except Exception:
        logger.exception("Unexpected error while computing %s", test_type)
        return 500, {"status": "error", "message": INTERNAL_ERROR}

    logger.info("%s computed for %s (%d warnings)", test_type.value, record_id, len(result.warnings))
    return 200, result.to_response()
