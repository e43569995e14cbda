"""debugmap - map compiled class locations to source locations and back."""

__version__ = "0.3.0"
