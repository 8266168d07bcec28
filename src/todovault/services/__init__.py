"""Services module for todovault - business logic layer.

- auth_service / session_store: registration, login and the active session
- todo_service: session-scoped todo operations
- diagnostics_service / admin_gate: administrative viewer, export and reset
- config_service: configuration file
- app_context: process root wiring one store into every repository
"""
