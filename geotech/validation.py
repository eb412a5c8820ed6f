"""Проверка входных данных по видам испытаний.

Каждая функция принимает «сырую» полезную нагрузку запроса, приводит её к
типизированной модели и проверяет структуру и диапазоны. При первом же
нарушении бросается InputValidationError с текстом для пользователя;
расчёт в этом случае не выполняется.
"""

from typing import Any

from pydantic import TypeAdapter, ValidationError

from geotech.errors import InputValidationError
from geotech.insitu.cpt import corrected_resistance
from geotech.models import (
    AtterbergData,
    CBRData,
    CompactionPoint,
    CPTReading,
    FoundationParameters,
    SievePoint,
    SPTCorrections,
    SPTReading,
)

# Диапазоны проверок
MAX_MOISTURE = 50.0  # %, испытание на уплотнение
MAX_DRY_DENSITY = 3.0  # г/см³
CBR_TARGETS = (2.5, 5.0)  # мм
CBR_TOLERANCE = 1.0  # мм, допустимое удаление ближайшего отсчёта

SHALLOW_SUBTYPES = ("strip", "pad", "raft")
DEEP_SUBTYPES = ("single_pile", "pile_group")


def format_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(part) for part in err.get("loc", ()))
    return f"{loc}: {err['msg']}" if loc else err["msg"]


def _parse(tp, payload: Any):
    try:
        return TypeAdapter(tp).validate_python(payload)
    except ValidationError as exc:
        raise InputValidationError(format_error(exc)) from exc


def _require_list(payload: Any) -> list:
    if not isinstance(payload, list) or not payload:
        raise InputValidationError("Data array is required and cannot be empty")
    return payload


def _require_dict(payload: Any, message: str) -> dict:
    if not isinstance(payload, dict) or not payload:
        raise InputValidationError(message)
    return payload


# =============================================================================
# Полевые испытания
# =============================================================================


def validate_spt(payload: Any, corrections: dict | None = None) -> tuple[list[SPTReading], SPTCorrections]:
    readings = _parse(list[SPTReading], _require_list(payload))
    for reading in readings:
        if reading.depth is None or reading.depth <= 0:
            raise InputValidationError("Depth is required and must be greater than 0")
        has_counts = reading.blow_counts is not None and len(reading.blow_counts) >= 2
        has_increments = None not in (reading.N1, reading.N2, reading.N3)
        if not (has_counts or has_increments):
            raise InputValidationError(
                "Each data point must have either blow_counts array or N1, N2, N3 values"
            )
        if reading.blow_counts and any(n < 0 for n in reading.blow_counts):
            raise InputValidationError("Blow counts must be non-negative")

    return readings, _parse(SPTCorrections, corrections or {})


def validate_cpt(payload: Any) -> list[CPTReading]:
    readings = _parse(list[CPTReading], _require_list(payload))
    for reading in readings:
        if reading.depth <= 0:
            raise InputValidationError("Depth is required and must be greater than 0")
        if reading.qc <= 0:
            raise InputValidationError("Cone resistance qc must be greater than 0")
        if reading.u2 is not None and corrected_resistance(reading.qc, reading.u2) <= 0:
            raise InputValidationError("Corrected cone resistance qt must be greater than 0")
    return readings


# =============================================================================
# Лабораторные испытания
# =============================================================================


def validate_atterberg(payload: Any) -> AtterbergData:
    data = _parse(AtterbergData, _require_dict(payload, "Atterberg data is required"))
    if data.plastic_limit is None:
        raise InputValidationError("Plastic limit is required")

    has_flow = data.blow_counts is not None and data.moisture_contents is not None
    if has_flow:
        if len(data.blow_counts) != len(data.moisture_contents):
            raise InputValidationError("blow_counts and moisture_contents must have the same length")
        if any(n <= 0 for n in data.blow_counts):
            raise InputValidationError("Blow counts must be greater than 0")
        if any(w < 0 for w in data.moisture_contents):
            raise InputValidationError("Moisture contents must be non-negative")

    if data.liquid_limit is None:
        if not has_flow:
            raise InputValidationError(
                "Liquid limit or flow curve data (blow_counts, moisture_contents) is required"
            )
        if len(data.blow_counts) < 3:
            raise InputValidationError("At least 3 flow curve points are required to derive the liquid limit")

    return data


def validate_psd(payload: Any) -> list[SievePoint]:
    points = _parse(list[SievePoint], _require_list(payload))
    for point in points:
        if point.sieve_size <= 0:
            raise InputValidationError("Sieve size is required and must be greater than 0")
        if not 0 <= point.percent_passing <= 100:
            raise InputValidationError("Percent passing must be between 0 and 100")

    ordered = sorted(points, key=lambda p: p.sieve_size, reverse=True)
    for coarse, fine in zip(ordered, ordered[1:]):
        if coarse.sieve_size == fine.sieve_size:
            raise InputValidationError("Sieve sizes must be unique")
        if fine.percent_passing > coarse.percent_passing:
            raise InputValidationError("Percent passing must not increase as sieve size decreases")
    return ordered


def validate_compaction(payload: Any, metadata: dict | None = None) -> tuple[list[CompactionPoint], float | None, str]:
    """Returns: (точки по возрастанию влажности, плотность в поле, метод)."""
    if not isinstance(payload, list) or len(payload) < 3:
        raise InputValidationError("At least 3 data points are required for compaction analysis")
    points = _parse(list[CompactionPoint], payload)
    for point in points:
        if not 0 <= point.moisture_content <= MAX_MOISTURE:
            raise InputValidationError("Moisture content must be between 0 and 50%")
        if not 0 < point.dry_density <= MAX_DRY_DENSITY:
            raise InputValidationError("Dry density must be between 0 and 3.0 g/cm³")

    metadata = metadata or {}
    field_density = metadata.get("field_density")
    if field_density is not None:
        if isinstance(field_density, bool) or not isinstance(field_density, (int, float)) or field_density <= 0:
            raise InputValidationError("Field density must be greater than 0")
        field_density = float(field_density)

    test_method = metadata.get("test_method") or "standard"
    if test_method not in ("standard", "modified"):
        raise InputValidationError("Test method must be 'standard' or 'modified'")

    return sorted(points, key=lambda p: p.moisture_content), field_density, test_method


def validate_cbr(payload: Any) -> CBRData:
    raw = _require_dict(payload, "Penetration and load arrays are required")
    if raw.get("penetration") is None or raw.get("load") is None:
        raise InputValidationError("Penetration and load arrays are required")
    data = _parse(CBRData, raw)

    if len(data.penetration) != len(data.load):
        raise InputValidationError("Penetration and load arrays must have the same length")
    if len(data.penetration) < 3:
        raise InputValidationError("At least 3 load-penetration points are required")
    if any(v < 0 for v in data.penetration) or any(v < 0 for v in data.load):
        raise InputValidationError("Penetration and load values must be non-negative")
    if any(b <= a for a, b in zip(data.penetration, data.penetration[1:])):
        raise InputValidationError("Penetration values must be strictly increasing")

    if data.penetration[0] > CBR_TARGETS[0] or data.penetration[-1] < CBR_TARGETS[1]:
        raise InputValidationError("Penetration data must span 2.5 mm and 5.0 mm")
    for target in CBR_TARGETS:
        if not any(abs(p - target) <= CBR_TOLERANCE for p in data.penetration):
            raise InputValidationError(f"No penetration reading within 1.0 mm of {target} mm")
    return data


# =============================================================================
# Фундаменты
# =============================================================================


def validate_foundation(parameters: Any, foundation_type: str) -> FoundationParameters:
    """Проверка параметров фундамента ("shallow" или "deep")."""
    raw = _require_dict(parameters, "Missing required field: parameters")
    params = _parse(FoundationParameters, raw)

    if params.foundation_type != foundation_type:
        raise InputValidationError(f"foundationType must be '{foundation_type}' for this analysis")
    if not params.selected_layers:
        raise InputValidationError("No soil layers selected for analysis")
    for layer in params.selected_layers:
        if layer.from_depth >= layer.to_depth:
            raise InputValidationError("Layer fromDepth must be less than toDepth")

    if foundation_type == "shallow":
        if params.sub_type not in SHALLOW_SUBTYPES:
            raise InputValidationError("subType must be one of: strip, pad, raft")
        if params.footing_width is None:
            raise InputValidationError("footingWidth is required and must be greater than 0")
        if params.embedment_depth is None:
            raise InputValidationError("embedmentDepth is required")
    else:
        if params.sub_type not in DEEP_SUBTYPES:
            raise InputValidationError("subType must be one of: single_pile, pile_group")
        if params.pile_length is None or params.pile_diameter is None:
            raise InputValidationError("pileLength and pileDiameter are required and must be greater than 0")
        if (
            params.sub_type == "pile_group"
            and params.pile_spacing is not None
            and params.pile_spacing < params.pile_diameter
        ):
            raise InputValidationError("pileSpacing must not be less than pileDiameter")
        if not any(layer.from_depth < params.pile_length for layer in params.selected_layers):
            raise InputValidationError("No soil layer intersects the pile length")

    return params
