"""
Synthetic network outputs rendered from known joint positions.
"""

import numpy as np
from typing import Dict, List, Optional, Tuple

from ..models.output import PoseNetOutput
from ..pose.joint import JointName, NUM_JOINTS
from ..pose.skeleton import NUM_EDGES, edges_for

# Joint positions (x, y) in model-input pixels
Skeleton = Dict[JointName, Tuple[float, float]]

# Standing figure in grid cells (col, row), nose-centred, 5 cells wide and 15 tall
STANDING_TEMPLATE: Dict[JointName, Tuple[int, int]] = {
    JointName.NOSE: (2, 1),
    JointName.LEFT_EYE: (3, 0),
    JointName.RIGHT_EYE: (1, 0),
    JointName.LEFT_EAR: (4, 0),
    JointName.RIGHT_EAR: (0, 0),
    JointName.LEFT_SHOULDER: (4, 3),
    JointName.RIGHT_SHOULDER: (0, 3),
    JointName.LEFT_ELBOW: (4, 5),
    JointName.RIGHT_ELBOW: (0, 5),
    JointName.LEFT_WRIST: (4, 7),
    JointName.RIGHT_WRIST: (0, 7),
    JointName.LEFT_HIP: (3, 8),
    JointName.RIGHT_HIP: (1, 8),
    JointName.LEFT_KNEE: (3, 11),
    JointName.RIGHT_KNEE: (1, 11),
    JointName.LEFT_ANKLE: (3, 14),
    JointName.RIGHT_ANKLE: (1, 14),
}


def standing_skeleton(origin: Tuple[int, int], output_stride: int) -> Skeleton:
    """
    Place the standing template on the grid.

    Args:
        origin: Top-left cell of the figure (col, row)
        output_stride: Model-input pixels per grid cell

    Returns:
        Joint positions on grid points, in model-input pixels
    """
    return {
        joint_name: ((origin[0] + col) * output_stride, (origin[1] + row) * output_stride)
        for joint_name, (col, row) in STANDING_TEMPLATE.items()
    }


def _create_gaussian_heatmap(
    center_x: float,
    center_y: float,
    grid_size: Tuple[int, int],
    sigma: float
) -> np.ndarray:
    """Create Gaussian heatmap centered at (center_x, center_y) in grid units."""
    height, width = grid_size

    y_coords, x_coords = np.ogrid[:height, :width]

    return np.exp(-((x_coords - center_x)**2 + (y_coords - center_y)**2) / (2 * sigma**2))


def render_pose_fields(
    skeletons: List[Skeleton],
    grid_size: Tuple[int, int],
    output_stride: int = 16,
    sigma: float = 1.0,
    model_input_size: Optional[Tuple[int, int]] = None
) -> PoseNetOutput:
    """
    Render the four network outputs for a set of people.

    Each cell's offset and displacement vectors belong to the person whose
    joint Gaussian is strongest there. Joints missing from a skeleton are
    treated as not visible.

    Args:
        skeletons: Joint positions per person, in model-input pixels
        grid_size: Output grid size (height, width)
        output_stride: Model-input pixels per grid cell
        sigma: Gaussian sigma in grid cells
        model_input_size: Network input size (width, height); derived from
            the grid if omitted

    Returns:
        PoseNetOutput holding the rendered tensors
    """
    height, width = grid_size
    if model_input_size is None:
        model_input_size = ((width - 1) * output_stride + 1, (height - 1) * output_stride + 1)

    heatmap = np.zeros((NUM_JOINTS, height, width))
    offsets = np.zeros((2 * NUM_JOINTS, height, width))
    forward = np.zeros((2 * NUM_EDGES, height, width))
    backward = np.zeros((2 * NUM_EDGES, height, width))

    rows, cols = np.mgrid[:height, :width]
    origin_x = cols * output_stride
    origin_y = rows * output_stride

    for joint_name in JointName:
        strongest = np.zeros((height, width))
        for skeleton in skeletons:
            if joint_name not in skeleton:
                continue
            x, y = skeleton[joint_name]
            gaussian = _create_gaussian_heatmap(x / output_stride, y / output_stride, grid_size, sigma)
            owned = gaussian > strongest
            strongest = np.where(owned, gaussian, strongest)

            offsets[joint_name][owned] = (y - origin_y)[owned]
            offsets[joint_name + NUM_JOINTS][owned] = (x - origin_x)[owned]

            for edge in edges_for(joint_name):
                if edge.parent == joint_name and edge.child in skeleton:
                    field, (other_x, other_y) = forward, skeleton[edge.child]
                elif edge.child == joint_name and edge.parent in skeleton:
                    field, (other_x, other_y) = backward, skeleton[edge.parent]
                else:
                    continue
                field[edge.index][owned] = other_y - y
                field[edge.index + NUM_EDGES][owned] = other_x - x

        heatmap[joint_name] = strongest

    return PoseNetOutput(
        heatmap=heatmap,
        offsets=offsets,
        forward_displacement=forward,
        backward_displacement=backward,
        model_input_size=model_input_size,
        output_stride=output_stride
    )
