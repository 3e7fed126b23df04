"""
Log console terminal UI (Textual)
"""
from .app import ConsoleApp, run_app

__all__ = ['ConsoleApp', 'run_app']
