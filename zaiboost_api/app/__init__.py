"""
FastAPI application for the ZaiBoost boosting service.

Subpackages:

* ``core`` – configuration, logging, security, credential encryption and
  the JSON-backed ledger.
* ``schemas`` – request and response models.
* ``services`` – business logic on top of the ledger.
* ``api`` – versioned HTTP routers.
"""
