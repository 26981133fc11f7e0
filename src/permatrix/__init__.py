"""permatrix - hybrid role/direct permission resolution service."""

__version__ = "0.1.0"
