"""
Inventory access layer package.

Client-side access to the remote inventory backend, which is reachable only
through parametrized GETs and JSON-body POSTs against one endpoint URL.

Structure:
- app.main: Factory that wires config, logging, metrics, client and cache.
- app.adapters: HTTP client for the inventory backend.
- app.caching: TTL cache store and the cached read wrapper.
- app.domain: Typed read/write operations, models and input validation.
- app.notifications: Borrow/return alert e-mails (invoked by callers).
"""
