"""
Views Package - Console UI views
"""
from .console import ConsoleView

__all__ = ['ConsoleView']
