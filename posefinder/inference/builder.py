"""
Pose decoding entry points.
"""

import logging
from typing import Any, Optional, Tuple, Union

from ..models.output import PoseNetOutput
from ..pose.pose import Pose, PoseSet
from .candidates import find_candidate_roots
from .config import Algorithm, DecoderConfiguration
from .multiple import decode_multiple_poses
from .remap import CoordinateRemapper
from .single import decode_single_pose

logger = logging.getLogger(__name__)


class PoseBuilder:
    """Decodes one network output into poses in original image coordinates."""

    def __init__(
        self,
        output: PoseNetOutput,
        configuration: Optional[DecoderConfiguration] = None,
        input_image_size: Optional[Tuple[int, int]] = None
    ):
        """
        Initialize pose builder.

        Args:
            output: Network output
            configuration: Decoder configuration (defaults if omitted)
            input_image_size: Original image size (width, height); defaults to
                the model input size, i.e. no rescaling
        """
        self.output = output
        self.configuration = (configuration or DecoderConfiguration()).validate()
        self.input_image_size = input_image_size or output.model_input_size
        self.remapper = CoordinateRemapper(output.model_input_size, self.input_image_size)

    @property
    def pose(self) -> Pose:
        """The single most likely pose."""
        pose = decode_single_pose(self.output, self.configuration)
        return self.remapper.remap_pose(pose)

    @property
    def poses(self) -> PoseSet:
        """All detected poses, in descending root confidence order."""
        candidate_roots = find_candidate_roots(self.output, self.configuration)
        poses = decode_multiple_poses(
            self.output, candidate_roots, self.configuration, self.remapper
        )
        self.remapper.remap_poses(poses)
        logger.debug(f"Decoded {len(poses)} poses from {len(candidate_roots)} candidates")
        return poses

    def estimate(self, algorithm: Union[str, Algorithm] = Algorithm.MULTIPLE) -> PoseSet:
        if Algorithm.parse(algorithm) is Algorithm.SINGLE:
            return [self.pose]
        return self.poses


def decode(
    heatmap: Any,
    offsets: Any,
    forward_displacement: Any,
    backward_displacement: Any,
    output_stride: int,
    model_input_size: Tuple[int, int],
    original_image_size: Tuple[int, int],
    configuration: Optional[DecoderConfiguration] = None,
    algorithm: Union[str, Algorithm] = Algorithm.MULTIPLE
) -> PoseSet:
    """
    Decode raw network tensors into poses.

    Args:
        heatmap: Joint confidence tensor [17, H, W]
        offsets: Offset tensor [34, H, W]
        forward_displacement: Parent -> child displacement tensor [32, H, W]
        backward_displacement: Child -> parent displacement tensor [32, H, W]
        output_stride: Model-input pixels per grid cell
        model_input_size: Network input size (width, height)
        original_image_size: Source image size (width, height)
        configuration: Decoder configuration (defaults if omitted)
        algorithm: 'single' or 'multiple'

    Returns:
        Poses in image coordinates; exactly one pose in single mode

    Raises:
        ShapeMismatch: Tensor shapes do not agree with the skeleton
        InvalidConfiguration: A parameter is out of range
    """
    algorithm = Algorithm.parse(algorithm)
    output = PoseNetOutput(
        heatmap=heatmap,
        offsets=offsets,
        forward_displacement=forward_displacement,
        backward_displacement=backward_displacement,
        model_input_size=model_input_size,
        output_stride=output_stride
    )
    builder = PoseBuilder(output, configuration, original_image_size)
    return builder.estimate(algorithm)
