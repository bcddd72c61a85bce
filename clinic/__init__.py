"""Multi-tenant clinic practice management backend."""
