"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Subtask) and id assignment
- task_store.py: JSON file persistence (whole-file load/save)
- task_api.py: CRUD operations on tasks and subtasks
"""
