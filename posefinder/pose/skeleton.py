"""
Static skeleton topology: the 16 limbs connecting the 17 joints.

The edge index selects the pair of displacement channels that encode the
limb's vector field. The edges form a tree rooted at the nose.
"""

from typing import Dict, List, NamedTuple, Optional, Tuple

from .joint import JointName


class SkeletonEdge(NamedTuple):
    """A directed parent -> child limb."""
    index: int
    parent: JointName
    child: JointName


EDGES: Tuple[SkeletonEdge, ...] = (
    SkeletonEdge(0, JointName.NOSE, JointName.LEFT_EYE),
    SkeletonEdge(1, JointName.LEFT_EYE, JointName.LEFT_EAR),
    SkeletonEdge(2, JointName.NOSE, JointName.RIGHT_EYE),
    SkeletonEdge(3, JointName.RIGHT_EYE, JointName.RIGHT_EAR),
    SkeletonEdge(4, JointName.NOSE, JointName.LEFT_SHOULDER),
    SkeletonEdge(5, JointName.LEFT_SHOULDER, JointName.LEFT_ELBOW),
    SkeletonEdge(6, JointName.LEFT_ELBOW, JointName.LEFT_WRIST),
    SkeletonEdge(7, JointName.LEFT_SHOULDER, JointName.LEFT_HIP),
    SkeletonEdge(8, JointName.LEFT_HIP, JointName.LEFT_KNEE),
    SkeletonEdge(9, JointName.LEFT_KNEE, JointName.LEFT_ANKLE),
    SkeletonEdge(10, JointName.NOSE, JointName.RIGHT_SHOULDER),
    SkeletonEdge(11, JointName.RIGHT_SHOULDER, JointName.RIGHT_ELBOW),
    SkeletonEdge(12, JointName.RIGHT_ELBOW, JointName.RIGHT_WRIST),
    SkeletonEdge(13, JointName.RIGHT_SHOULDER, JointName.RIGHT_HIP),
    SkeletonEdge(14, JointName.RIGHT_HIP, JointName.RIGHT_KNEE),
    SkeletonEdge(15, JointName.RIGHT_KNEE, JointName.RIGHT_ANKLE),
)

NUM_EDGES = len(EDGES)

_INCIDENT_EDGES: Dict[JointName, Tuple[SkeletonEdge, ...]] = {
    joint_name: tuple(e for e in EDGES if joint_name in (e.parent, e.child))
    for joint_name in JointName
}

_DIRECTED_EDGES: Dict[Tuple[JointName, JointName], SkeletonEdge] = {
    (e.parent, e.child): e for e in EDGES
}

# Joint groups by body part
LEFT_ARM: List[JointName] = [JointName.LEFT_SHOULDER, JointName.LEFT_ELBOW, JointName.LEFT_WRIST]
RIGHT_ARM: List[JointName] = [JointName.RIGHT_SHOULDER, JointName.RIGHT_ELBOW, JointName.RIGHT_WRIST]
LEFT_LEG: List[JointName] = [JointName.LEFT_HIP, JointName.LEFT_KNEE, JointName.LEFT_ANKLE]
RIGHT_LEG: List[JointName] = [JointName.RIGHT_HIP, JointName.RIGHT_KNEE, JointName.RIGHT_ANKLE]


def edges_for(joint_name: JointName) -> Tuple[SkeletonEdge, ...]:
    """Edges where the joint is either the parent or the child, in index order."""
    return _INCIDENT_EDGES[JointName(joint_name)]


def edge(parent: JointName, child: JointName) -> Optional[SkeletonEdge]:
    """Exact directed lookup; None if no limb runs from parent to child."""
    return _DIRECTED_EDGES.get((JointName(parent), JointName(child)))

