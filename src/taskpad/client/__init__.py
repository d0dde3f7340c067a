"""
Task client.

Components:
- api.py: async HTTP client for /api/tasks
- state.py: serializable UI state (tasks, draft, filter, theme, notice)
- controller.py: actions that sync state with the API
- render.py: text rendering of the state
"""
