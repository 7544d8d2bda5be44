"""Filter concerns.

Each module is stateless: functions build clauses or resolve values, and the
clause-bearing ones write back through the ``ArgumentStore`` they are given.
"""
