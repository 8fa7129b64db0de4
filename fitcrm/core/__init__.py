"""
Core business logic for client management.

This module is framework-agnostic - it doesn't import FastAPI, httpx,
boto3 or any infrastructure concerns. Storage and the exercise catalog
are reached through protocols, so the logic can be tested with plain
in-memory doubles.
"""
