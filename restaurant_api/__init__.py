"""
                Restaurant Ordering API

A small REST backend for a restaurant ordering demo: dishes and orders
held in memory, with every request validated by an ordered chain of stages.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
