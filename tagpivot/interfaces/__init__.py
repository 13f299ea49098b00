"""
Interfaces package - user-facing entry points.
"""
