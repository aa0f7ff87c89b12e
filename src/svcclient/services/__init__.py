"""Service layer — client facade, failure dispatch and error presentation.

Services may import from domain, infrastructure, transport and plugins.
They must never import from commands or output.
"""
