"""Rewrite LaTeX into a form that Moodle STACK questions accept, with a desktop window."""

__version__ = "0.1.0"
__all__ = ["__version__"]