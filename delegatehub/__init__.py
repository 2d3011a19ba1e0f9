"""Client-side orchestration for delegate-voting directories."""

__version__ = "0.1.0"
