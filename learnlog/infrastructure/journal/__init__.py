"""Journal infrastructure: persistence, HTTP schemas and routers."""
