"""Service layer — verifier composition and ServiceResult adapters.

Services may import from the domain layer.
They must never import from commands or output.
"""
