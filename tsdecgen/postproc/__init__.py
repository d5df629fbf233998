"""Post-processing applied to generated declarations."""

from .lint import DeclarationLinter

__all__ = ["DeclarationLinter"]
