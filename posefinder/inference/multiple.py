"""
Multi-person decoding.

Each root candidate is grown into a full skeleton by walking the limb tree
outwards, following the displacement fields from every known joint to its
unknown neighbours and snapping the estimate onto the offset field.
"""

import logging
from collections import deque
from typing import List, Optional

from ..models.output import PoseNetOutput
from ..pose.joint import Joint, JointName, NUM_JOINTS
from ..pose.pose import Pose, PoseSet
from ..pose.skeleton import SkeletonEdge, edges_for
from .config import DecoderConfiguration
from .remap import CoordinateRemapper

logger = logging.getLogger(__name__)


def decode_multiple_poses(
    output: PoseNetOutput,
    candidate_roots: List[Joint],
    configuration: DecoderConfiguration,
    remapper: CoordinateRemapper
) -> PoseSet:
    """
    Assemble, score and deduplicate poses seeded from root candidates.

    Args:
        output: Network output
        candidate_roots: Seeds sorted by descending confidence
        configuration: Decoder configuration
        remapper: Image-space mapping, used to measure matching distances

    Returns:
        Accepted poses in acceptance order, still in model-input coordinates
    """
    detected_poses: PoseSet = []

    for root in candidate_roots:
        if _is_detected(root, detected_poses, configuration.matching_joint_distance, remapper):
            logger.debug(f"Skipping {root.name.label} root at {root.cell}: already part of a pose")
            continue

        pose = assemble_pose(output, root, configuration)
        pose.confidence = pose_confidence(
            pose, detected_poses, configuration.matching_joint_distance, remapper
        )

        if pose.confidence < configuration.pose_confidence_threshold:
            logger.debug(
                f"Discarding pose from {root.name.label} root at {root.cell}: "
                f"confidence {pose.confidence:.3f}"
            )
            continue

        detected_poses.append(pose)
        logger.debug(f"Accepted pose {len(detected_poses)} with confidence {pose.confidence:.3f}")

        if len(detected_poses) >= configuration.max_pose_count:
            break

    return detected_poses


def assemble_pose(output: PoseNetOutput, root: Joint, configuration: DecoderConfiguration) -> Pose:
    """
    Grow a pose breadth-first from a root joint.

    The limbs form a tree, so each joint is reached through exactly one edge
    and the walk ends once every reachable joint has been estimated.
    """
    pose = Pose()
    pose[root.name] = root

    queue = deque([root.name])
    while queue:
        joint_name = queue.popleft()
        for edge in edges_for(joint_name):
            parent = pose[edge.parent]
            child = pose[edge.child]
            if parent.is_valid == child.is_valid:
                continue

            source, target = (parent, child) if parent.is_valid else (child, parent)
            joint = estimate_adjacent_joint(output, source, target.name, edge, configuration)
            if joint is None:
                continue

            pose[target.name] = joint
            if joint.is_valid:
                queue.append(target.name)

    return pose


def estimate_adjacent_joint(
    output: PoseNetOutput,
    source: Joint,
    target_name: JointName,
    edge: SkeletonEdge,
    configuration: DecoderConfiguration
) -> Optional[Joint]:
    """
    Locate the joint at the far end of a limb.

    Args:
        output: Network output
        source: Known joint at one end of the edge
        target_name: Joint to estimate at the other end
        edge: Limb connecting the two
        configuration: Decoder configuration

    Returns:
        The estimated joint, or None if the displacement points off the grid
    """
    if source.name == edge.parent:
        displacement = output.forward_vector(edge.index, source.cell)
    else:
        displacement = output.backward_vector(edge.index, source.cell)

    position = source.position.translated(displacement.x, displacement.y)
    cell = output.cell_for(position)
    if cell is None:
        return None

    stride = output.output_stride
    for _ in range(configuration.adjacent_joint_offset_refinement_steps):
        offset = output.offset(target_name, cell)
        refined = offset.translated(cell.col * stride, cell.row * stride)
        refined_cell = output.cell_for(refined)
        if refined_cell is None:
            break
        position, cell = refined, refined_cell

    confidence = output.confidence(target_name, cell)
    return Joint(
        name=target_name,
        cell=cell,
        position=position,
        confidence=confidence,
        is_valid=confidence >= configuration.joint_confidence_threshold
    )


def pose_confidence(
    pose: Pose,
    detected_poses: PoseSet,
    matching_distance: float,
    remapper: CoordinateRemapper
) -> float:
    """
    Score a pose by the joints it adds over the already detected poses.

    The sum of confidences of valid joints not matching a joint of a detected
    pose is divided by the total joint count, not the counted subset.
    """
    total = sum(
        joint.confidence for joint in pose
        if joint.is_valid and not _is_detected(joint, detected_poses, matching_distance, remapper)
    )
    return total / NUM_JOINTS


def _is_detected(
    joint: Joint,
    detected_poses: PoseSet,
    matching_distance: float,
    remapper: CoordinateRemapper
) -> bool:
    """True if a detected pose has a valid same-named joint within the matching distance."""
    position = remapper.apply(joint.position)
    for detected_pose in detected_poses:
        other = detected_pose[joint.name]
        if not other.is_valid:
            continue
        if position.distance_to(remapper.apply(other.position)) <= matching_distance:
            return True
    return False
