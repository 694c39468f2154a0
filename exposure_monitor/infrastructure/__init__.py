"""
Infrastructure layer - Adapters and cross-cutting concerns.

This layer contains:
- In-memory stubs for the platform, backend and storage ports
- Structured logging and correlation ID support

IMPORT RULES:
- CAN import from: domain, application
- Implements ports defined in application layer
"""
