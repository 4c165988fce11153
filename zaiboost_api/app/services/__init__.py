"""
Service layer.

Each service wraps ledger access for one domain and raises the errors
from ``core.errors`` that the API turns into 4xx responses.
"""
