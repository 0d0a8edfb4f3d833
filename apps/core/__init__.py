"""
Core app - Shared abstractions and utilities.

This app provides platform-agnostic building blocks for:
- Service-layer error taxonomy (exceptions)
- Input validators shared across apps
- Background task execution (TaskService)

The task abstraction allows switching between:
- Local development and tests (in-process execution)
- Celery + Redis (production)
"""
