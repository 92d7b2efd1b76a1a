"""
PoseFinder Decoding Package

Turns the heatmap, offset and displacement outputs of a PoseNet-style
keypoint network into scored, labeled skeletons for one or many people.
"""

from .exceptions import PoseFinderError, ShapeMismatch, InvalidConfiguration, OutOfBounds
from .pose import Joint, JointName, Pose, SkeletonEdge
from .models import PoseNetOutput
from .inference import Algorithm, DecoderConfiguration, PoseBuilder, decode

__version__ = "1.0.0"
__author__ = "Human Pose Estimation Team"

__all__ = [
    'PoseFinderError', 'ShapeMismatch', 'InvalidConfiguration', 'OutOfBounds',
    'Joint', 'JointName', 'Pose', 'SkeletonEdge', 'PoseNetOutput',
    'Algorithm', 'DecoderConfiguration', 'PoseBuilder', 'decode'
]
