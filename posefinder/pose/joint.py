"""
Joint names, grid cells and per-joint detection records.
"""

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import NamedTuple


class JointName(IntEnum):
    """The 17 body parts predicted by the network, in channel order."""
    NOSE = 0
    LEFT_EYE = 1
    RIGHT_EYE = 2
    LEFT_EAR = 3
    RIGHT_EAR = 4
    LEFT_SHOULDER = 5
    RIGHT_SHOULDER = 6
    LEFT_ELBOW = 7
    RIGHT_ELBOW = 8
    LEFT_WRIST = 9
    RIGHT_WRIST = 10
    LEFT_HIP = 11
    RIGHT_HIP = 12
    LEFT_KNEE = 13
    RIGHT_KNEE = 14
    LEFT_ANKLE = 15
    RIGHT_ANKLE = 16

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> 'JointName':
        try:
            return cls[label.upper()]
        except KeyError:
            raise ValueError(f"Unknown joint name: {label}") from None


NUM_JOINTS = len(JointName)

# COCO keypoint names, in channel order
KEYPOINT_NAMES = [joint_name.label for joint_name in JointName]


class Cell(NamedTuple):
    """Integer (row, col) index into the output grid."""
    row: int
    col: int


class Point(NamedTuple):
    """Continuous 2-D coordinate (x, y)."""
    x: float
    y: float

    def translated(self, dx: float, dy: float) -> 'Point':
        return Point(self.x + dx, self.y + dy)

    def scaled(self, sx: float, sy: float) -> 'Point':
        return Point(self.x * sx, self.y * sy)

    def distance_to(self, other: 'Point') -> float:
        return math.hypot(other.x - self.x, other.y - self.y)


@dataclass(frozen=True)
class Joint:
    """
    A single body joint of one pose.
    
    Joints are value records; the decoder replaces them in their pose slot
    instead of mutating them.
    """
    name: JointName
    cell: Cell = Cell(0, 0)
    position: Point = Point(0.0, 0.0)
    confidence: float = 0.0
    is_valid: bool = False
