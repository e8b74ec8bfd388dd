"""
Business services for Tripwiser.

- currency.py: static-table exchange rates and formatting
- balances.py: group net positions and settling transfers
- splits.py: equal/custom split helpers and member reference checks
- funds.py: trip fund depletion status and budget alerts
- trips.py: trip status, dates and progress
- store.py: DynamoDB document loading for groups and trips
"""

__all__: list[str] = []
