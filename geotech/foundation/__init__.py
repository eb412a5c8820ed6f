"""Расчёт фундаментов: мелкого заложения и свайных.

Использование:
    from geotech.foundation import shallow, pile
    result = shallow.analyse(params)
"""

from . import pile, shallow, tables

__all__ = ["shallow", "pile", "tables"]
