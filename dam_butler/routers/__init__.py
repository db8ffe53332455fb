"""
Routers Module - HTTP endpoints (thin adapters over the services).
"""
