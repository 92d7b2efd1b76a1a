"""
PoseNet output tensors and bounds-checked access into them.
"""

import math
from typing import Any, Mapping, Optional, Tuple

import numpy as np
import torch

from ..exceptions import OutOfBounds, ShapeMismatch, InvalidConfiguration
from ..pose.joint import Cell, JointName, Point, NUM_JOINTS
from ..pose.skeleton import NUM_EDGES


# Output names of the converted PoseNet model
HEATMAP = 'heatmap'
OFFSETS = 'offsets'
FORWARD_DISPLACEMENT = 'displacementFwd'
BACKWARD_DISPLACEMENT = 'displacementBwd'


def to_numpy(tensor: Any) -> np.ndarray:
    """
    Convert a model output to a float numpy array.

    Args:
        tensor: torch tensor, numpy array or nested sequence

    Returns:
        Float64 array; a leading batch dimension of size 1 is dropped
    """
    if isinstance(tensor, torch.Tensor):
        tensor = tensor.detach().cpu().numpy()
    array = np.asarray(tensor, dtype=np.float64)
    if array.ndim == 4 and array.shape[0] == 1:
        array = array[0]
    return array


class FeatureGrid:
    """Read-only (channel, row, col) view of one output tensor."""

    def __init__(self, tensor: Any, name: str = 'tensor'):
        array = to_numpy(tensor).view()
        if array.ndim != 3:
            raise ShapeMismatch(f"{name} must be 3-D (channels, height, width), got shape {array.shape}")
        array.setflags(write=False)
        self.name = name
        self.data = array

    @property
    def shape(self) -> Tuple[int, int, int]:
        return self.data.shape

    @property
    def channels(self) -> int:
        return self.data.shape[0]

    @property
    def height(self) -> int:
        return self.data.shape[1]

    @property
    def width(self) -> int:
        return self.data.shape[2]

    def value(self, channel: int, row: int, col: int) -> float:
        channels, height, width = self.data.shape
        if not (0 <= channel < channels and 0 <= row < height and 0 <= col < width):
            raise OutOfBounds(
                f"Index ({channel}, {row}, {col}) outside {self.name} of shape {self.data.shape}"
            )
        return float(self.data[channel, row, col])

    def plane(self, channel: int) -> np.ndarray:
        """The (height, width) slice of one channel."""
        if not 0 <= channel < self.channels:
            raise OutOfBounds(f"Channel {channel} outside {self.name} of shape {self.data.shape}")
        return self.data[channel]


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class PoseNetOutput:
    """
    The four tensors produced by one network pass.

    Positions are expressed in model-input pixels: a joint at cell (row, col)
    sits at (col * stride + dx, row * stride + dy).

    Channel layout:
        heatmap: [17, H, W] joint confidence
        offsets: [34, H, W] dy for joint j at channel j, dx at j + 17
        displacements: [32, H, W] dy for edge e at channel e, dx at e + 16
    """

    def __init__(
        self,
        heatmap: Any,
        offsets: Any,
        forward_displacement: Any,
        backward_displacement: Any,
        model_input_size: Tuple[int, int],
        output_stride: int
    ):
        """
        Initialize and validate the output.

        Args:
            heatmap: Joint confidence tensor [17, H, W]
            offsets: Offset tensor [34, H, W]
            forward_displacement: Parent -> child displacement tensor [32, H, W]
            backward_displacement: Child -> parent displacement tensor [32, H, W]
            model_input_size: Network input size (width, height)
            output_stride: Model-input pixels per grid cell
        """
        if output_stride <= 0:
            raise InvalidConfiguration(f"output_stride must be positive, got {output_stride}")
        if min(model_input_size) <= 0:
            raise InvalidConfiguration(f"model_input_size must be positive, got {model_input_size}")

        self.heatmap = FeatureGrid(heatmap, HEATMAP)
        self.offsets = FeatureGrid(offsets, OFFSETS)
        self.forward_displacement = FeatureGrid(forward_displacement, FORWARD_DISPLACEMENT)
        self.backward_displacement = FeatureGrid(backward_displacement, BACKWARD_DISPLACEMENT)
        self.model_input_size = (model_input_size[0], model_input_size[1])
        self.output_stride = int(output_stride)

        self._validate_shapes()

    @classmethod
    def from_prediction(
        cls,
        prediction: Mapping[str, Any],
        model_input_size: Tuple[int, int],
        output_stride: int
    ) -> 'PoseNetOutput':
        """Build from a mapping of model output names to tensors."""
        missing = [name for name in (HEATMAP, OFFSETS, FORWARD_DISPLACEMENT, BACKWARD_DISPLACEMENT)
                   if name not in prediction]
        if missing:
            raise ShapeMismatch(f"Prediction is missing outputs: {', '.join(missing)}")

        return cls(
            heatmap=prediction[HEATMAP],
            offsets=prediction[OFFSETS],
            forward_displacement=prediction[FORWARD_DISPLACEMENT],
            backward_displacement=prediction[BACKWARD_DISPLACEMENT],
            model_input_size=model_input_size,
            output_stride=output_stride
        )

    def _validate_shapes(self):
        expected_channels = [
            (self.heatmap, NUM_JOINTS),
            (self.offsets, 2 * NUM_JOINTS),
            (self.forward_displacement, 2 * NUM_EDGES),
            (self.backward_displacement, 2 * NUM_EDGES)
        ]
        for grid, channels in expected_channels:
            if grid.channels != channels:
                raise ShapeMismatch(f"{grid.name} must have {channels} channels, got {grid.channels}")

        grid_size = self.heatmap.shape[1:]
        for grid, _ in expected_channels[1:]:
            if grid.shape[1:] != grid_size:
                raise ShapeMismatch(
                    f"{grid.name} grid {grid.shape[1:]} does not match heatmap grid {grid_size}"
                )
        if 0 in grid_size:
            raise ShapeMismatch(f"Output grid is empty: {grid_size}")

    @property
    def height(self) -> int:
        return self.heatmap.height

    @property
    def width(self) -> int:
        return self.heatmap.width

    def confidence(self, joint_name: JointName, cell: Cell) -> float:
        return self.heatmap.value(joint_name, cell.row, cell.col)

    def offset(self, joint_name: JointName, cell: Cell) -> Point:
        dy = self.offsets.value(joint_name, cell.row, cell.col)
        dx = self.offsets.value(joint_name + NUM_JOINTS, cell.row, cell.col)
        return Point(dx, dy)

    def position(self, joint_name: JointName, cell: Cell) -> Point:
        """Sub-pixel joint position at a cell: cell origin plus the offset vector."""
        offset = self.offset(joint_name, cell)
        return Point(cell.col * self.output_stride + offset.x,
                     cell.row * self.output_stride + offset.y)

    def cell_for(self, position: Point) -> Optional[Cell]:
        """Grid cell nearest a model-input position, or None outside the grid."""
        row = _round_half_away(position.y / self.output_stride)
        col = _round_half_away(position.x / self.output_stride)
        if not (0 <= row < self.height and 0 <= col < self.width):
            return None
        return Cell(row, col)

    def forward_vector(self, edge_index: int, cell: Cell) -> Point:
        return self._displacement(self.forward_displacement, edge_index, cell)

    def backward_vector(self, edge_index: int, cell: Cell) -> Point:
        return self._displacement(self.backward_displacement, edge_index, cell)

    @staticmethod
    def _displacement(grid: FeatureGrid, edge_index: int, cell: Cell) -> Point:
        dy = grid.value(edge_index, cell.row, cell.col)
        dx = grid.value(edge_index + NUM_EDGES, cell.row, cell.col)
        return Point(dx, dy)
