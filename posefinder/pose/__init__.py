"""
Pose data model and skeleton topology.
"""

from .joint import Cell, Joint, JointName, Point, NUM_JOINTS, KEYPOINT_NAMES
from .skeleton import SkeletonEdge, EDGES, NUM_EDGES, edges_for, edge
from .pose import Pose, PoseSet

__all__ = [
    'Cell', 'Joint', 'JointName', 'Point', 'NUM_JOINTS', 'KEYPOINT_NAMES',
    'SkeletonEdge', 'EDGES', 'NUM_EDGES', 'edges_for', 'edge',
    'Pose', 'PoseSet'
]
