"""
Pose record: one slot per joint name plus an aggregate confidence.
"""

from dataclasses import replace
from typing import Any, Dict, Iterable, Iterator, List

from .joint import Joint, JointName, NUM_JOINTS


class Pose:
    """
    One assembled skeleton.
    
    Joints live in a fixed list indexed by joint ordinal, so every joint name
    always has an entry (possibly invalid).
    """
    
    def __init__(self):
        self.joints: List[Joint] = [Joint(name=joint_name) for joint_name in JointName]
        self.confidence: float = 0.0
        self.is_remapped: bool = False
    
    def __getitem__(self, joint_name: JointName) -> Joint:
        return self.joints[joint_name]
    
    def __setitem__(self, joint_name: JointName, joint: Joint):
        if joint.name != joint_name:
            raise ValueError(f"Cannot store {joint.name.label} in the {JointName(joint_name).label} slot")
        self.joints[joint_name] = joint
    
    def __iter__(self) -> Iterator[Joint]:
        return iter(self.joints)
    
    def __len__(self) -> int:
        return NUM_JOINTS
    
    def __repr__(self) -> str:
        return (f"Pose(confidence={self.confidence:.3f}, "
                f"valid_joints={len(self.valid_joints())}/{NUM_JOINTS})")
    
    def valid_joints(self) -> List[Joint]:
        return [joint for joint in self.joints if joint.is_valid]
    
    def movement(self, group: Iterable[JointName], previous: "Pose") -> float:
        """
        Total displacement of a group of joints since an earlier pose.
        
        Args:
            group: Joint names, e.g. skeleton.LEFT_ARM
            previous: The same person in an earlier frame
        
        Returns:
            Sum of per-joint distances; joints invalid in either pose add nothing
        """
        total = 0.0
        for joint_name in group:
            current, before = self[joint_name], previous[joint_name]
            if current.is_valid and before.is_valid:
                total += current.position.distance_to(before.position)
        return total
    
    def update(self, joint_name: JointName, **changes) -> Joint:
        """Replace the joint in its slot with a copy carrying the given changes."""
        joint = replace(self.joints[joint_name], **changes)
        self.joints[joint_name] = joint
        return joint
    
    def to_keypoints(self) -> List[Dict[str, Any]]:
        """
        Export joints as keypoint dictionaries.
        
        Returns:
            List of {'name', 'x', 'y', 'confidence', 'valid'} dicts in joint order
        """
        return [
            {
                'name': joint.name.label,
                'x': joint.position.x,
                'y': joint.position.y,
                'confidence': joint.confidence,
                'valid': joint.is_valid
            }
            for joint in self.joints
        ]


# Accepted poses, in acceptance order
PoseSet = List[Pose]
