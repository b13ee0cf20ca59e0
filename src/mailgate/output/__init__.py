"""Rendering of ServiceResult for terminals, scripts, and JSON consumers."""
