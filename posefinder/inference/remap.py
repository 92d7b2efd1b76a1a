"""
Mapping from model-input coordinates to original image coordinates.
"""

from typing import Iterable, Tuple

from ..exceptions import InvalidConfiguration
from ..pose.joint import Point
from ..pose.pose import Pose


class CoordinateRemapper:
    """Independent-axis scale from the network input to the source image."""
    
    def __init__(self, model_input_size: Tuple[int, int], image_size: Tuple[int, int]):
        """
        Args:
            model_input_size: Network input size (width, height)
            image_size: Original image size (width, height)
        """
        if min(model_input_size) <= 0 or min(image_size) <= 0:
            raise InvalidConfiguration(
                f"Sizes must be positive, got model input {model_input_size} and image {image_size}"
            )
        self.scale_x = image_size[0] / model_input_size[0]
        self.scale_y = image_size[1] / model_input_size[1]
    
    def apply(self, position: Point) -> Point:
        return position.scaled(self.scale_x, self.scale_y)
    
    def remap_pose(self, pose: Pose) -> Pose:
        """Scale every joint of the pose in place, valid or not."""
        if pose.is_remapped:
            raise ValueError("Pose has already been remapped to image coordinates")
        
        for joint in list(pose):
            pose.update(joint.name, position=self.apply(joint.position))
        pose.is_remapped = True
        
        return pose
    
    def remap_poses(self, poses: Iterable[Pose]):
        for pose in poses:
            self.remap_pose(pose)
