"""
Roster: an in-memory school roster manager.

Models students, classes and a school, enforces enrollment and capacity
rules, and produces simple aggregate reports.
"""

__version__ = "1.0.0"
__author__ = "Roster Development Team"
__description__ = "In-memory school roster manager"
