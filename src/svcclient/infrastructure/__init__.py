"""Infrastructure layer — cookies, credential injection, request accounting.

Depends on domain types and httpx. Never imports from services or commands.
"""
