"""Restaurant customer role-play simulation driven by a chat model."""

__version__ = "0.1.0"
