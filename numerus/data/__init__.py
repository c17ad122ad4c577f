# file: numerus/data/__init__.py
"""Packaged reference datasets (country.csv, nadp.csv)."""
