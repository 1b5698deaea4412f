"""Game domain services: board, rounds, final round, scoring and timers.

This package holds the Jeopardy state machine. It is imported by the
webhook blueprint, keeping Slack transport concerns separated from core
game mechanics.
"""
