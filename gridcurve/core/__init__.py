"""
Core modules для gridcurve

Численные примитивы, доменные типы, контракты и исключения.
"""
