"""REST service for managing AI teacher profiles."""

__version__ = "0.1.0"
