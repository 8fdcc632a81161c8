"""
Task Manager Services Package - business logic behind the HTTP routes.

Core Services:
- auth_service: credential verification, token issuance and resolution
- user_service: registration and profile management
- task_service: owner-scoped task lifecycle
- stats_service: per-user completion statistics
"""
