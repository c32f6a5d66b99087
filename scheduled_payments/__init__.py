"""
Scheduled Payments - Source Package

Record upcoming payments (bills, subscriptions, rent, ...), keep them in
local storage, and review them as a history list and on a calendar.

DESIGN PRINCIPLES:
1. One store owns the collection; everything else reads snapshots
2. Fail early, fail visibly (bad input and unreadable data are reported)
3. No silent corrections
4. Every store operation is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Scheduled Payments Team"
