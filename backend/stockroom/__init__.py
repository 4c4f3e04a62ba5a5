"""
Stockroom: household and shared inventory tracker.
"""
