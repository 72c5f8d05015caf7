"""
Barber Empire - Source Package

An earnings tracker for a single barber: cash, card and tips in,
recurring fixed costs out, and live progress towards a weekly or
monthly goal.

DESIGN PRINCIPLES:
1. The engine is pure: (Snapshot, now) in, figures out
2. State changes are commands producing a new Snapshot
3. Bad form input is rejected before it becomes a command
4. A broken record never crashes the app
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Barber Empire Team"
