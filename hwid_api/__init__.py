"""HWID API Service: API keys bound to hardware identifiers."""

__version__ = "1.0.0"
