"""
Decoder configuration and algorithm selection.
"""

import numbers
from dataclasses import dataclass, asdict, fields
from enum import Enum
from typing import Any, Dict, Mapping, Union

from ..exceptions import InvalidConfiguration


class Algorithm(Enum):
    """Decoding mode: one subject, or any number of people."""
    SINGLE = 'single'
    MULTIPLE = 'multiple'

    @classmethod
    def parse(cls, value: Union[str, 'Algorithm']) -> 'Algorithm':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise InvalidConfiguration(f"Unknown algorithm: {value}") from None


@dataclass
class DecoderConfiguration:
    """Tunable thresholds for pose decoding."""
    joint_confidence_threshold: float = 0.1
    pose_confidence_threshold: float = 0.5
    matching_joint_distance: float = 40.0  # image pixels
    local_search_radius: int = 3  # grid cells
    max_pose_count: int = 15
    adjacent_joint_offset_refinement_steps: int = 3

    def validate(self) -> 'DecoderConfiguration':
        """Raise InvalidConfiguration if any parameter is out of range."""
        for name in ('joint_confidence_threshold', 'pose_confidence_threshold'):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise InvalidConfiguration(f"{name} must be within [0, 1], got {value}")

        if not self.matching_joint_distance >= 0:
            raise InvalidConfiguration(
                f"matching_joint_distance must be non-negative, got {self.matching_joint_distance}"
            )

        for name in ('local_search_radius', 'adjacent_joint_offset_refinement_steps'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 0:
                raise InvalidConfiguration(f"{name} must be a non-negative integer, got {value!r}")

        if (isinstance(self.max_pose_count, bool) or not isinstance(self.max_pose_count, numbers.Integral)
                or self.max_pose_count <= 0):
            raise InvalidConfiguration(
                f"max_pose_count must be a positive integer, got {self.max_pose_count!r}"
            )

        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> 'DecoderConfiguration':
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise InvalidConfiguration(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        return cls(**values).validate()
