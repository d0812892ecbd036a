"""
binview - terminal hex viewer with multi-encoding text preview.
"""

__version__ = "0.1.0"
