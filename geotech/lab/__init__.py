"""Лабораторные испытания: границы Аттерберга, гранулометрия, уплотнение, CBR."""

from . import atterberg, cbr, compaction, psd

__all__ = ["atterberg", "psd", "compaction", "cbr"]
