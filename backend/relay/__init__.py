"""
Completion relay service.
"""
