"""Common Lambda utilities and base classes.

Provides JSON serialization helpers, exceptions, structured logging and a
local Lambda execution context.
"""
