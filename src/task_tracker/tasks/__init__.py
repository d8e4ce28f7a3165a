"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskFilter, TaskStats, ...)
- errors.py: expected, user-recoverable errors
- task_repository.py: the in-memory collection + sync with a TaskStore
- task_service.py: business operations used by the CLI
"""
