"""
gaugebuild - build and release orchestration for the gauge CLI.

Compiles gauge for every supported OS/architecture, stages its install layout
and produces the Windows installer, macOS package and Linux archive.
"""

__version__ = "0.1.0"
