"""
MentalSpace application-specific code.

- analytics: Pure check-in analytics core
- services: Motor-backed persistence services
- pipelines: Orchestration of services and analytics
- routers / schemas: FastAPI endpoints and pydantic models

Uses generic infrastructure from the common/ package.
"""
