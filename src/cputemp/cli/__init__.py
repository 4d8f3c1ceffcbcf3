"""
CLI package for cputemp

This package provides the command-line interface for
running a temperature sampling session.
"""

from .interface import main

__all__ = ['main']
