"""
Cap Rate Calculation Engine

Core calculation modules for cap rate and NOI analysis.
All functions are pure and never raise on degenerate numeric input.
"""

from app.calculations import formatting, cap_rate, noi

__all__ = ["formatting", "cap_rate", "noi"]
