# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Abstractions for integrating arrayify with HPC batch scheduling systems.

- `BatchInterface`: the abstract interface every batch-system backend
  implements. It translates a job array into the submission command and
  dispatch script of the scheduler, submits it, and queries the state of
  a submitted array.

- `BatchMeta`: a metaclass that registers available batch-system backends
  and selects one by name, from an environment variable, or by probing
  system availability. The `@batch_system` decorator registers
  implementations automatically.
"""

from .interface import BatchInterface
from .meta import BatchMeta, batch_system

__all__ = ["BatchInterface", "BatchMeta", "batch_system"]
