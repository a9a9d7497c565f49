"""Exports & reporting: CSV writers and Markdown reports.

- writers.py: CSV emitters for inputs, core results and scenario results
- reports.py: localized assumptions.md and results.md generators
"""
