"""Domain layer — validation rules and report types.

This layer depends only on stdlib and pydantic.
It must never import from services, commands, config, or output.
"""
