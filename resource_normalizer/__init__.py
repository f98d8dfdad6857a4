"""Resource Normalizer: rewrite inconsistent REST API payloads into canonical resource documents."""

__version__ = "1.0.0"
