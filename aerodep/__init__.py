"""
Aero Dependency Analyzer

Models aircraft subsystems as a dependency graph and explains how a
failure cascades to the systems that depend on it.
"""

__version__ = "1.0.0"
