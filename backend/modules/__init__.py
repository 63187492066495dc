"""
Feature modules for the BuildScape backend.

Each module is self-contained with its own:
- interfaces.py: Protocol definitions for the module's storage
- models.py: Pydantic models for data transfer
- service.py: Business logic implementation
- routes.py: FastAPI route handlers (where the module exposes any)
- exceptions.py: Module-specific exceptions

Services receive repositories through their constructors; only the
composition root in api/dependencies.py knows the Supabase implementations.
"""
