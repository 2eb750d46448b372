"""
Platform Ops - operator client for the platform control plane.
"""
__version__ = "0.1.0"
