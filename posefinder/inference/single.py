"""
Single-person decoding: the most confident cell of every joint heatmap.
"""

import numpy as np

from ..models.output import PoseNetOutput
from ..pose.joint import Cell, JointName, NUM_JOINTS
from ..pose.pose import Pose
from .config import DecoderConfiguration


def decode_single_pose(output: PoseNetOutput, configuration: DecoderConfiguration) -> Pose:
    """
    Build one pose from independent per-joint maxima.

    Args:
        output: Network output
        configuration: Decoder configuration

    Returns:
        Pose in model-input coordinates with all 17 joints set; its confidence
        is the mean joint confidence, valid or not
    """
    pose = Pose()

    for joint_name in JointName:
        heatmap = output.heatmap.plane(joint_name)
        # argmax returns the first maximum in row-major order
        row, col = np.unravel_index(int(np.argmax(heatmap)), heatmap.shape)
        cell = Cell(int(row), int(col))
        # raw logits below zero count as no detection
        confidence = max(output.confidence(joint_name, cell), 0.0)

        pose.update(
            joint_name,
            cell=cell,
            position=output.position(joint_name, cell),
            confidence=confidence,
            is_valid=confidence >= configuration.joint_confidence_threshold
        )

    pose.confidence = sum(joint.confidence for joint in pose) / NUM_JOINTS

    return pose
