"""
Shared pieces used by the worker: value types, JSON logging, small helpers.
"""
