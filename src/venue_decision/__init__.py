"""Venue decisions for outdoor events.

Combines a forecast lookup, a multi-factor suitability score and a
stakeholder vote into one answer: should the event happen outside?
"""

__version__ = "0.1.0"
