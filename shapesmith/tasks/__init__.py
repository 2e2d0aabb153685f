"""Layer 3: Tasks - User intent translation.

Tasks combine primitives into one unit of work. Tasks do not fetch or
extract anything; they receive component maps already in memory.
"""

from shapesmith.tasks.assembletask import LayerAssembler, collect_layer

__all__ = ["LayerAssembler", "collect_layer"]
