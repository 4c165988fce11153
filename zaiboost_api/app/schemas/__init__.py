"""
Pydantic schema definitions for API payloads.

Stored records live in ``app.models``; the schemas here describe what
clients send and receive, which is why order responses add joined
display fields and never expose the raw password envelope to customers.
"""
