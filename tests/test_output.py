"""
Tests for tensor access and output validation.
"""

import numpy as np
import pytest
import torch

from posefinder import InvalidConfiguration, OutOfBounds, ShapeMismatch
from posefinder.models import FeatureGrid, PoseNetOutput
from posefinder.pose import Cell, JointName, Point

from .conftest import empty_fields


def make_output(fields, stride=16, model_input_size=(33, 33)):
    return PoseNetOutput(model_input_size=model_input_size, output_stride=stride, **fields)


class TestFeatureGrid:
    def test_value_reads_channel_row_col(self):
        data = np.arange(24, dtype=float).reshape(2, 3, 4)
        grid = FeatureGrid(data)

        assert grid.shape == (2, 3, 4)
        assert grid.value(1, 2, 3) == 23.0
        assert grid.value(0, 1, 0) == 4.0

    @pytest.mark.parametrize('index', [(2, 0, 0), (0, 3, 0), (0, 0, 4), (-1, 0, 0), (0, -1, 0)])
    def test_out_of_bounds(self, index):
        grid = FeatureGrid(np.zeros((2, 3, 4)))
        with pytest.raises(OutOfBounds):
            grid.value(*index)

    def test_data_is_read_only_and_caller_array_untouched(self):
        data = np.zeros((1, 2, 2))
        grid = FeatureGrid(data)

        with pytest.raises(ValueError):
            grid.data[0, 0, 0] = 1.0
        data[0, 0, 0] = 1.0
        assert grid.value(0, 0, 0) == 1.0

    def test_rejects_non_3d(self):
        with pytest.raises(ShapeMismatch):
            FeatureGrid(np.zeros((3, 3)))

    def test_accepts_batched_torch_tensor(self):
        grid = FeatureGrid(torch.ones(1, 2, 3, 3))
        assert grid.shape == (2, 3, 3)
        assert grid.value(1, 2, 2) == 1.0


class TestPoseNetOutput:
    def test_valid_shapes(self):
        output = make_output(empty_fields(3, 5))
        assert (output.height, output.width) == (3, 5)

    @pytest.mark.parametrize('name', ['heatmap', 'offsets', 'forward_displacement', 'backward_displacement'])
    def test_wrong_channel_count(self, name):
        fields = empty_fields(3, 3)
        fields[name] = fields[name][:-1]
        with pytest.raises(ShapeMismatch):
            make_output(fields)

    def test_disagreeing_grid_sizes(self):
        fields = empty_fields(3, 3)
        fields['offsets'] = np.zeros((34, 3, 4))
        with pytest.raises(ShapeMismatch):
            make_output(fields)

    def test_invalid_stride(self):
        with pytest.raises(InvalidConfiguration):
            make_output(empty_fields(3, 3), stride=0)

    def test_from_prediction(self):
        fields = empty_fields(3, 3)
        prediction = {
            'heatmap': torch.from_numpy(fields['heatmap']).unsqueeze(0),
            'offsets': fields['offsets'],
            'displacementFwd': fields['forward_displacement'],
            'displacementBwd': fields['backward_displacement'],
        }
        output = PoseNetOutput.from_prediction(prediction, (33, 33), 16)
        assert output.heatmap.shape == (17, 3, 3)

    def test_from_prediction_missing_output(self):
        with pytest.raises(ShapeMismatch, match='displacementBwd'):
            PoseNetOutput.from_prediction(
                {'heatmap': 0, 'offsets': 0, 'displacementFwd': 0}, (33, 33), 16
            )

    def test_position_and_vectors_use_split_channel_layout(self):
        fields = empty_fields(3, 3)
        fields['offsets'][JointName.LEFT_EYE, 1, 2] = 2.0  # dy
        fields['offsets'][JointName.LEFT_EYE + 17, 1, 2] = 3.0  # dx
        fields['forward_displacement'][5, 0, 1] = -4.0  # dy
        fields['forward_displacement'][5 + 16, 0, 1] = 7.0  # dx
        fields['backward_displacement'][5, 0, 1] = 1.5
        output = make_output(fields)

        assert output.offset(JointName.LEFT_EYE, Cell(1, 2)) == Point(3.0, 2.0)
        assert output.position(JointName.LEFT_EYE, Cell(1, 2)) == Point(35.0, 18.0)
        assert output.forward_vector(5, Cell(0, 1)) == Point(7.0, -4.0)
        assert output.backward_vector(5, Cell(0, 1)) == Point(0.0, 1.5)

    def test_cell_for_rounds_to_nearest_cell(self):
        output = make_output(empty_fields(3, 3))

        assert output.cell_for(Point(0.0, 0.0)) == Cell(0, 0)
        assert output.cell_for(Point(23.9, 7.9)) == Cell(0, 1)
        assert output.cell_for(Point(24.0, 8.0)) == Cell(1, 2)
        assert output.cell_for(Point(-7.0, 0.0)) == Cell(0, 0)

    @pytest.mark.parametrize('position', [Point(-8.0, 0.0), Point(0.0, 40.0), Point(48.0, 16.0)])
    def test_cell_for_outside_grid(self, position):
        output = make_output(empty_fields(3, 3))
        assert output.cell_for(position) is None
