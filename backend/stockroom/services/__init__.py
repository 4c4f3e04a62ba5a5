"""
Resource services. Each takes a Session and the resolved caller.
"""
