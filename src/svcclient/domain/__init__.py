"""Domain layer — envelope types, call options, URL rules.

This layer depends only on stdlib, pydantic and httpx URL parsing.
It must never import from services, transport, infrastructure, commands, or config.
"""
