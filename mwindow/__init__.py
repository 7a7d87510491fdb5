"""Maintenance window resources, a state reconciler and Deployment admission checks."""

__version__ = "0.1.0"
__all__ = ["api", "controller", "webhook"]