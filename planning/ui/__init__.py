"""
User interface implementations.

Currently only TerminalDisplay exists. Other front ends take the same
result dataclasses and render them their own way.
"""

from .terminal import TerminalDisplay

__all__ = ["TerminalDisplay"]
