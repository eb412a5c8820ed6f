"""Классификации грунтов и текстовые заключения.

Только отображение рассчитанных величин на метки USCS / AASHTO / классы CBR
и короткие описания. Численных расчётов здесь нет.
"""

from collections import Counter

# --- SPT ---

_SPT_BANDS = (
    (4, "Very Loose Sand", "requires densification"),
    (10, "Loose Sand", "moderate bearing capacity"),
    (30, "Medium Dense Sand", "good bearing capacity"),
    (50, "Dense Sand", "excellent bearing capacity"),
)


def spt_density_class(n60: float) -> str:
    """Плотность песка по N60."""
    for limit, label, _ in _SPT_BANDS:
        if n60 < limit:
            return label
    return "Very Dense Sand"


def spt_interpretation(avg_n60: float) -> str:
    for limit, label, note in _SPT_BANDS:
        if avg_n60 < limit:
            return f"{label} - {note}"
    return "Very Dense Sand - excellent bearing capacity"


# --- CPT ---

_CPT_BANDS = (
    (1.31, "Dense Sand to Clayey Sand"),
    (2.05, "Sands: Clean Sand to Silty Sand"),
    (2.60, "Sand Mixtures: Silty Sand to Sandy Silt"),
    (2.95, "Silt Mixtures: Clayey Silt to Silty Clay"),
    (3.60, "Clays: Silty Clay to Clay"),
)


def cpt_behavior_type(ic: float) -> str:
    """Тип поведения грунта по индексу Ic (Robertson)."""
    for limit, label in _CPT_BANDS:
        if ic < limit:
            return label
    return "Organic Soils: Peat"


def cpt_interpretation(behavior_types: list[str]) -> str:
    if not behavior_types:
        return ""
    dominant, count = Counter(behavior_types).most_common(1)[0]
    return f"Profile dominated by {dominant} ({count} of {len(behavior_types)} readings)"


# --- Границы Аттерберга ---

_FINE_DESCRIPTIONS = {
    "CL": "Inorganic clays of low plasticity",
    "CH": "Inorganic clays of high plasticity",
    "ML": "Inorganic silts and very fine sands",
    "MH": "Inorganic silts of high plasticity",
}


def a_line(liquid_limit: float) -> float:
    """Линия A Касагранде: PI = 0.73·(LL − 20)."""
    return 0.73 * (liquid_limit - 20.0)


def u_line(liquid_limit: float) -> float:
    """Линия U (верхняя граница): PI = 0.9·(LL − 8)."""
    return 0.9 * (liquid_limit - 8.0)


def uscs_fine_grained(liquid_limit: float, plasticity_index: float) -> str:
    """USCS для пылевато-глинистых грунтов по диаграмме пластичности."""
    if plasticity_index < 4:
        return "ML"
    above_a_line = plasticity_index > 7 and plasticity_index > a_line(liquid_limit)
    if liquid_limit < 50:
        return "CL" if above_a_line else "ML"
    return "CH" if above_a_line else "MH"


def aashto_fine_grained(liquid_limit: float, plasticity_index: float) -> str:
    low_ll = liquid_limit <= 40
    if plasticity_index <= 10:
        return "A-4" if low_ll else "A-5"
    if plasticity_index <= 20:
        return "A-6" if low_ll else "A-7-5"
    return "A-6" if low_ll else "A-7-6"


def plasticity_description(uscs: str, plasticity_index: float) -> str:
    description = _FINE_DESCRIPTIONS.get(uscs, "Unclassified fine-grained soil")
    if plasticity_index < 7:
        return f"{description} (low plasticity)"
    if plasticity_index < 17:
        return f"{description} (medium plasticity)"
    return f"{description} (high plasticity)"


def atterberg_interpretation(description: str, liquid_limit: float, plasticity_index: float) -> str:
    return f"{description}; LL = {liquid_limit:.1f}%, PI = {plasticity_index:.1f}%"


# --- Гранулометрия ---


def gradation(cu: float, cc: float) -> str:
    if cu >= 4 and 1 <= cc <= 3:
        return "Well-graded"
    if cu < 4:
        return "Uniformly graded"
    return "Poorly graded"


def uscs_coarse_grained(gravel: float, sand: float, fines: float, cu: float, cc: float) -> str:
    """USCS по гранулометрии.

    Для fines > 50 % нужна пластичность, поэтому возвращается ML/CL.
    """
    if fines > 50:
        return "ML/CL"
    if gravel > sand:
        if fines < 5:
            return "GW" if cu >= 4 and 1 <= cc <= 3 else "GP"
        if fines > 12:
            return "GM/GC"
        return "GW-GM/GP-GM"
    if fines < 5:
        return "SW" if cu >= 6 and 1 <= cc <= 3 else "SP"
    if fines > 12:
        return "SM/SC"
    return "SW-SM/SP-SM"


def aashto_coarse_grained(gravel: float, sand: float, fines: float) -> str:
    if fines <= 35:
        return "A-1-a" if gravel > sand else "A-1-b"
    if fines <= 50:
        return "A-2"
    return "A-4/A-5/A-6/A-7"


def psd_description(gravel: float, sand: float, fines: float, grading: str) -> str:
    if gravel > 50:
        description = "Gravel"
    elif sand > 50:
        description = "Sand"
    else:
        description = "Fine-grained soil"
    if fines > 12:
        description += " with fines"
    return f"{description} ({grading.lower()})"


def psd_interpretation(fines: float) -> str:
    if fines < 5:
        return "Clean granular soil - excellent drainage, good for foundations"
    if fines < 12:
        return "Granular soil with some fines - good engineering properties"
    if fines < 50:
        return "Mixed soil - engineering properties depend on fines plasticity"
    return "Fine-grained soil - plasticity characteristics control behavior"


# --- Уплотнение ---


def compaction_interpretation(mdd: float, omc: float, efficiency: float | None = None) -> str:
    text = f"Maximum Dry Density: {mdd:.3f} g/cm³ at Optimum Moisture Content: {omc:.1f}%"
    if efficiency is not None:
        text += f". Field compaction efficiency: {efficiency:.1f}%"
    return text


# --- CBR ---


def cbr_bearing_class(cbr: float) -> str:
    if cbr < 2:
        return "Very Poor"
    if cbr < 5:
        return "Poor"
    if cbr < 8:
        return "Fair"
    if cbr < 15:
        return "Good"
    if cbr < 30:
        return "Very Good"
    return "Excellent"


def cbr_subgrade_class(cbr: float) -> str:
    if cbr < 3:
        return "Very Weak Subgrade"
    if cbr < 7:
        return "Weak Subgrade"
    if cbr < 20:
        return "Medium Subgrade"
    if cbr < 50:
        return "Strong Subgrade"
    return "Very Strong Subgrade"


def cbr_recommended_uses(cbr: float) -> list[str]:
    if cbr < 2:
        return ["Not suitable for pavement construction", "Requires soil improvement"]
    if cbr < 5:
        return ["Light traffic roads with thick pavement", "Parking areas"]
    if cbr < 10:
        return ["Residential roads", "Light commercial areas"]
    if cbr < 30:
        return ["Heavy traffic roads", "Industrial areas", "Airport taxiways"]
    return ["Heavy duty pavements", "Airport runways", "Container terminals"]


def cbr_interpretation(design_cbr: float, bearing_class: str, subgrade_class: str) -> str:
    return f"Design CBR {design_cbr:.1f}% - {bearing_class} bearing, {subgrade_class.lower()}"


# --- Фундаменты ---


def foundation_interpretation(allowable_load: float, total_settlement: float, limit_state: str) -> str:
    return (
        f"Allowable load {allowable_load:.0f} kN with predicted settlement "
        f"{total_settlement:.1f} mm; {limit_state.lower()} controls the design"
    )
