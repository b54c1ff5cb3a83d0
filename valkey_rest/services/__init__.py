"""Service Layer - one handler per gateway operation.

Invariants:
    - Handlers validate input, bound the store call with a timeout, and either
      return a response model or raise a GatewayError
    - No handler retries a failed store call
"""
