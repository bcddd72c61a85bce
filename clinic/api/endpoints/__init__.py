"""REST endpoint routers."""
