"""
Model-side boundary of the decoder.

This module contains:
- Bounds-checked access to the network output tensors
- The abstract network interface used by the frame pipeline
"""

from .output import FeatureGrid, PoseNetOutput, to_numpy
from .base_model import BasePoseNet

__all__ = ['FeatureGrid', 'PoseNetOutput', 'to_numpy', 'BasePoseNet']
