"""Blind-test domain services: matching, rounds, scores and leaderboard.

This package contains pure(ish) domain logic that should be imported by
HTTP routes and socket handlers, keeping transport concerns separated
from core game mechanics. Only ``storage`` and ``session`` touch the
database and the Flask application.
"""
