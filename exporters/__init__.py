from .console import ConsoleExporter

__all__ = ["ConsoleExporter"]
