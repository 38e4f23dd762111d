__version__ = "0.1.0"

__all__ = [
    "__version__",
    "checks",
    "cli",
    "core",
    "discovery",
    "errors",
    "exit_codes",
]
