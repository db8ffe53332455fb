"""
Services Module - Business logic between the routers and the AI layer.
"""
