"""
Allocation package

Provides:
- Client preferences
- Allocation planner (target holdings per auction)
- Hotel feasibility bounds for flight purchases
"""
