"""gldoc: simplified OpenGL reference documentation as JSON."""

__version__ = "0.3.0"
