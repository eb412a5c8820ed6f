"""Полевые испытания: SPT и CPT.

Использование:
    from geotech.insitu import spt, cpt
    result = spt.interpret(readings, corrections)
"""

from . import cpt, spt

__all__ = ["spt", "cpt"]
