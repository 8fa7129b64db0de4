"""
Infrastructure layer - external service integrations.

Each subdirectory wraps an external dependency:
- storage: Key-value backends (file, R2, memory) and the JSON adapter
- catalog: wger exercise catalog client

These wrappers translate between external formats and our domain models.
"""
