"""toolgate - declarative, condition-gated tool dispatch for browser automation."""

__version__ = "0.3.0"
