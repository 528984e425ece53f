"""Gslb resources, spec defaults and validation, DNS endpoint computation and a fake DNS server."""

__version__ = "0.1.0"
__all__ = ["api", "validator", "depresolver", "finalize", "dnsupdate", "fakedns"]