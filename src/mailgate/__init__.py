"""mailgate — composable email address validation."""

__version__ = "0.1.0"
