"""
wcag_scout package initializer.
Defines the package version. The CLI lives in :mod:`wcag_scout.cli`.
"""
__version__ = "0.1.0"
