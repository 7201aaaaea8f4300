# Middleware package init
"""
Blog API Backend - Middleware Package
======================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    Request ID runs first so the access log line carries the request's ID.
    Responses travel the chain in reverse.
"""
