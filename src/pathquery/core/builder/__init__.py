from .path import PathBuilder

__all__ = ["PathBuilder"]
