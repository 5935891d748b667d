"""
Toolpath Optimizer Package.

Post-processes a linear toolpath from a CAM path generator into an
equivalent, faster move sequence for a CNC router or drill, without ever
cutting at rapid speed or skipping a required lift.

Subpackages:
    moves: Move records, machine context, travel summary
    optimize: Optimization passes and the pipeline driver
    configs: Pipeline configuration loading and validation
    utils: YAML and logging helpers
"""

__version__ = "0.3.0"

__all__ = ["moves", "optimize", "configs", "utils", "errors"]
