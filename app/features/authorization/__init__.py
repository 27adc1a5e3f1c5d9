"""
Hierarchical authorization feature module.

Resolves which users fall inside an acting user's organizational scope and
decides read visibility and write permission for owned records (evangelism
contacts, student records) on top of that scope.
"""
