"""In-memory bookkeeping for a mesh VPN control server: namespaces, pre-auth
keys, machines, sharing, routes, IP allocation, key helpers and OIDC helpers."""

__version__ = "0.1.0"