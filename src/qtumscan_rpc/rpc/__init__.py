"""
RPC - Call dispatch for the Qtum node JSON-RPC surface.

Provides type coercion, the method table, request building, the HTTP
transport, and batching.
"""
