"""
Task subsystem.

Components:
- task_models.py: data structures (Task) and store errors
- task_store.py: SQLite-backed storage (create/find/save/delete)
- task_service.py: the four task operations used by the HTTP API
"""
