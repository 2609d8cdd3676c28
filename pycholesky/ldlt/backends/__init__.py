"""
Backends for LDL' decomposition.

cpu: CPULDLTBackend (reference)
gpu: GPULDLTBackend (PyTorch, imported lazily)
"""

from pycholesky.ldlt.backends.cpu import CPULDLTBackend

__all__ = ["CPULDLTBackend"]
