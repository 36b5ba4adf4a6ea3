"""bsahash package

Reads the file-name and hash tables of BSA archives and reports names that
share the same 64-bit hash. Prefer :mod:`bsahash.api` for programmatic use
and :mod:`bsahash.cli` for the command line entry point.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
