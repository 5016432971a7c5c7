"""Service layer — graph operations returning ServiceResult.

Services may import from domain and engine layers.
They must never import from commands or output.
"""
