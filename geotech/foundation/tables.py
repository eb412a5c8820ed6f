"""Коэффициенты несущей способности, формы, заглубления и сопротивления по боковой поверхности.

Источники:
- Terzaghi (1943), упрощённый Nγ = 2·(Nq + 1)·tanφ
- Meyerhof (1963), Nγ = (Nq − 1)·tan(1.4φ), коэффициенты заглубления через √Nq
- API RP 2A / Tomlinson (α-метод), Burland (β-метод)
- Converse-Labarre (эффективность куста свай)
"""

from dataclasses import dataclass
from functools import lru_cache
from math import ceil, floor, sqrt

import numpy as np

# --- Константы ---

NC_PILE = 9.0  # Nc под остриём сваи в глинах
PILE_MODULUS = 30e6  # кПа, бетон (30 ГПа)
ALPHA_FLOOR = 0.6
SHAFT_FRICTION_RATIO = 0.8  # δ = 0.8·φ на контакте свая-грунт

BASE_REDUCTION = {
    "CPT": 0.6,
    "SPT": 0.5,
}

# Коэффициенты формы Терцаги (sc, sq, sγ); плита считается квадратной
TERZAGHI_SHAPE = {
    "strip": (1.0, 1.0, 1.0),
    "pad": (1.3, 1.2, 0.8),
    "raft": (1.3, 1.2, 0.8),
}

# Коэффициенты формы Мейергофа (sc, sq, sγ) при B/L = 1 для pad и raft
MEYERHOF_SHAPE = {
    "strip": (1.0, 1.0, 1.0),
    "pad": (1.2, 1.2, 0.6),
    "raft": (1.2, 1.2, 0.6),
}

# Коэффициент влияния для жёсткого фундамента
RIGID_INFLUENCE = {
    "strip": 2.0,
    "pad": 0.82,
    "raft": 0.82,
}


@dataclass(frozen=True)
class BearingFactors:
    """Коэффициенты несущей способности Nc, Nq, Nγ."""

    nc: float
    nq: float
    ng: float


# =============================================================================
# Несущая способность
# =============================================================================


def _nq(phi_rad: float) -> float:
    # Nq = e^(π·tanφ) · tan²(45° + φ/2)
    return float(np.exp(np.pi * np.tan(phi_rad)) * np.tan(np.pi / 4.0 + phi_rad / 2.0) ** 2)


def _nc(nq: float, phi_rad: float) -> float:
    if phi_rad == 0:
        return float(np.pi + 2.0)
    return float((nq - 1.0) / np.tan(phi_rad))


@lru_cache(maxsize=256)
def terzaghi_factors(phi_deg: float) -> BearingFactors:
    """Nq, Nc = (Nq − 1)/tanφ (π + 2 при φ = 0), Nγ = 2·(Nq + 1)·tanφ."""
    phi = np.radians(phi_deg)
    nq = _nq(phi)
    return BearingFactors(nc=_nc(nq, phi), nq=nq, ng=float(2.0 * (nq + 1.0) * np.tan(phi)))


@lru_cache(maxsize=256)
def meyerhof_factors(phi_deg: float) -> BearingFactors:
    """Nγ = (Nq − 1)·tan(1.4φ)."""
    phi = np.radians(phi_deg)
    nq = _nq(phi)
    return BearingFactors(nc=_nc(nq, phi), nq=nq, ng=float((nq - 1.0) * np.tan(1.4 * phi)))


def meyerhof_depth_factors(nq: float, D: float, B: float) -> tuple[float, float, float]:
    """(dc, dq, dγ) = (1 + 0.2·√Nq·D/B, 1 + 0.1·√Nq·D/B, 1 + 0.1·D/B)."""
    root_nq = sqrt(nq)
    return 1.0 + 0.2 * root_nq * D / B, 1.0 + 0.1 * root_nq * D / B, 1.0 + 0.1 * D / B


def young_modulus(phi_deg: float) -> float:
    """Оценка модуля деформации грунта E, кПа."""
    if phi_deg > 0:
        return 10000.0 + 500.0 * phi_deg
    return 5000.0


# =============================================================================
# Сваи
# =============================================================================


def alpha_factor(cohesion: float) -> float:
    """Коэффициент α для глин по ступеням сцепления."""
    if cohesion <= 25:
        return 1.0
    if cohesion <= 50:
        return 1.0 - 0.004 * (cohesion - 25.0)
    if cohesion <= 100:
        return 0.9 - 0.006 * (cohesion - 50.0)
    return ALPHA_FLOOR


def beta_factor(phi_deg: float) -> float:
    """β = Ka·tan(0.8φ), Ka = (1 − sinφ)/(1 + sinφ)."""
    phi = np.radians(phi_deg)
    ka = (1.0 - np.sin(phi)) / (1.0 + np.sin(phi))
    return float(ka * np.tan(SHAFT_FRICTION_RATIO * phi))


def pile_grid(count: int) -> tuple[int, int]:
    """Раскладка куста из count свай в m рядов по n свай."""
    m = max(1, floor(sqrt(count)))
    return m, ceil(count / m)


def group_efficiency(count: int, spacing: float, diameter: float) -> float:
    """Коэффициент эффективности куста свай.

    s/d ≥ 6 — 1.0; 3 ≤ s/d < 6 — линейно от 0.85 до 1.0;
    s/d < 3 — формула Converse-Labarre для сетки m×n (не меньше 0).
    """
    ratio = spacing / diameter
    if ratio >= 6:
        return 1.0
    if ratio >= 3:
        return 0.85 + 0.15 * (ratio - 3.0) / 3.0

    m, n = pile_grid(count)
    theta = float(np.degrees(np.arctan(diameter / spacing)))
    return max(0.0, 1.0 - theta * ((n - 1) * m + (m - 1) * n) / (90.0 * m * n))
