"""
Chain Analytics API routers
"""
