"""Typed AWS Lambda functions behind API Gateway.

Provides a per-invocation request/response context that deserializes the
incoming JSON body into a typed object, and a base function class that
adapts API Gateway proxy events to that context.
"""
