"""API Gateway request context and function base class."""
