"""
Locked-In study tracker service.

Study-session lifecycle, session tags, task tracking, and derived study
analytics over a relational store, with per-owner authorization.
"""

__version__ = "0.1.0"
