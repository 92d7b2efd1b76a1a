"""
Synthetic data for exercising the decoder.
"""

from .synthetic import render_pose_fields, standing_skeleton, STANDING_TEMPLATE

__all__ = ['render_pose_fields', 'standing_skeleton', 'STANDING_TEMPLATE']
