"""
Task subsystem.

Components:
- task_models.py: data structure (Task)
- task_store.py: CSV-backed storage + query/update helpers
- pagination.py: Page + paginate()
- task_api.py: validated, timed operations used by the web layer
"""
