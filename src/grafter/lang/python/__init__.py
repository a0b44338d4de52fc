from .parser import PythonTreeParser
from .generator import PythonCodeGenerator, TreeStringGenerator

__all__ = ["PythonTreeParser", "PythonCodeGenerator", "TreeStringGenerator"]
