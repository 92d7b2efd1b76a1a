"""
Shared fixtures for decoder tests.
"""

import numpy as np
import pytest

from posefinder.data import render_pose_fields, standing_skeleton
from posefinder.pose import NUM_EDGES, NUM_JOINTS

STRIDE = 16
GRID_SIZE = (17, 17)  # (height, width)
MODEL_INPUT_SIZE = (257, 257)  # (width, height)


def empty_fields(height, width):
    """Zero-valued heatmap, offsets and displacement tensors."""
    return {
        'heatmap': np.zeros((NUM_JOINTS, height, width)),
        'offsets': np.zeros((2 * NUM_JOINTS, height, width)),
        'forward_displacement': np.zeros((2 * NUM_EDGES, height, width)),
        'backward_displacement': np.zeros((2 * NUM_EDGES, height, width)),
    }


@pytest.fixture
def left_person():
    return standing_skeleton((1, 1), STRIDE)


@pytest.fixture
def right_person():
    return standing_skeleton((10, 1), STRIDE)


@pytest.fixture
def two_people_output(left_person, right_person):
    return render_pose_fields(
        [left_person, right_person], GRID_SIZE, STRIDE, model_input_size=MODEL_INPUT_SIZE
    )


@pytest.fixture
def two_people_fields(two_people_output):
    """The rendered tensors as writable arrays, keyed like decode() arguments."""
    return {
        'heatmap': two_people_output.heatmap.data.copy(),
        'offsets': two_people_output.offsets.data.copy(),
        'forward_displacement': two_people_output.forward_displacement.data.copy(),
        'backward_displacement': two_people_output.backward_displacement.data.copy(),
    }
