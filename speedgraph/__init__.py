"""Animal speed chart logic (UI-agnostic).

This package contains:
- CSV tokenizing and record normalization
- column role inference and loose numeric coercion
- diet/category normalization and color assignment
- the selection pipeline (hide, search, filter, sort, cap)
- payload compute functions and chart helpers (Altair -> Vega-Lite spec dict)
"""
