"""Spec loading -- turn a file or stdin into an :class:`~clapi.models.APISpec`."""

from clapi.parser.loader import load_spec, load_spec_text

__all__ = ["load_spec", "load_spec_text"]
