"""Locale-aware rendering of calculator results.

- locales.py: LocaleFormat strategy (en-US, es-ES), number parsing and display
"""
