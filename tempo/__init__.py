"""
Tempo - goal-to-calendar planning.

Breaks a goal into milestones and tasks, then places the work into
fixed-size calendar blocks between a start date and a deadline.
"""

__version__ = "0.1.0"
