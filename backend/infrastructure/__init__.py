"""
Infrastructure - upstream fetch metrics
"""
