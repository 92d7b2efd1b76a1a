"""
Pose decoding from network outputs.
"""

from .config import Algorithm, DecoderConfiguration
from .candidates import find_candidate_roots
from .single import decode_single_pose
from .multiple import decode_multiple_poses, assemble_pose
from .remap import CoordinateRemapper
from .builder import PoseBuilder, decode
from .pipeline import FramePipeline, DecodeResult

__all__ = [
    'Algorithm', 'DecoderConfiguration', 'find_candidate_roots',
    'decode_single_pose', 'decode_multiple_poses', 'assemble_pose',
    'CoordinateRemapper', 'PoseBuilder', 'decode', 'FramePipeline', 'DecodeResult'
]
