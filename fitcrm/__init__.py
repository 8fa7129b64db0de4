"""
FitCRM - Client management for fitness coaches.

Packages:
- core: Clients, validation and exercise suggestions, free of any framework
- infrastructure: Storage backends and the wger catalog client
- api: FastAPI routes and dependency wiring
- config: Settings
"""

__version__ = "0.1.0"
