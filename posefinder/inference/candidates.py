"""
Root candidate selection: local maxima of the joint heatmaps.
"""

import logging
from typing import List

import numpy as np
from scipy.ndimage import maximum_filter

from ..models.output import PoseNetOutput
from ..pose.joint import Cell, Joint, JointName
from .config import DecoderConfiguration

logger = logging.getLogger(__name__)


def local_maxima_mask(heatmap: np.ndarray, radius: int) -> np.ndarray:
    """
    Cells not exceeded by any other cell in their neighbourhood.

    The neighbourhood is the (2 * radius + 1) square window, clamped to the
    grid; 'nearest' padding only repeats in-grid values, so clamping and
    padding give the same maximum. Ties with a neighbour still count as maxima.
    A radius beyond the grid covers the whole grid, so it is capped there.
    """
    radius = min(radius, max(heatmap.shape) - 1)
    if radius == 0:
        return np.ones(heatmap.shape, dtype=bool)
    return maximum_filter(heatmap, size=2 * radius + 1, mode='nearest') <= heatmap


def find_candidate_roots(
    output: PoseNetOutput,
    configuration: DecoderConfiguration
) -> List[Joint]:
    """
    Find seed joints for multi-person assembly.

    Args:
        output: Network output
        configuration: Decoder configuration

    Returns:
        Valid joints at above-threshold local maxima, sorted by descending
        confidence; ties keep joint-name then row-major order
    """
    candidates = []

    for joint_name in JointName:
        heatmap = output.heatmap.plane(joint_name)
        mask = local_maxima_mask(heatmap, configuration.local_search_radius)
        mask &= heatmap >= configuration.joint_confidence_threshold

        for row, col in zip(*np.nonzero(mask)):
            cell = Cell(int(row), int(col))
            candidates.append(Joint(
                name=joint_name,
                cell=cell,
                position=output.position(joint_name, cell),
                confidence=output.confidence(joint_name, cell),
                is_valid=True
            ))

    # sorted() is stable, so equal confidences keep scan order
    candidates = sorted(candidates, key=lambda joint: joint.confidence, reverse=True)
    logger.debug(f"Found {len(candidates)} root candidates")

    return candidates
