"""
Application layer - Use cases and orchestration for the exposure monitor.

This layer contains:
- Port definitions (abstract interfaces for the platform and backend)
- Application services (state machine, fetch pipeline, resolver, dispatcher)

IMPORT RULES:
- CAN import from: domain
- CANNOT import from: infrastructure, bootstrap
"""
