"""
Shared utilities for the Inventory Access Layer.

This package aggregates common building blocks consumed by the inventory
service package and its scripts:

- config: Configuration via pydantic-settings
- logging: Structured logging with correlation context
- metrics: Prometheus metrics helpers
- errors: Canonical error types and responses

Do not import from service_* packages into shared/.
"""
