"""
Tests for the frame pipeline and network boundary.
"""

import threading

import pytest
import torch

from posefinder import DecoderConfiguration, InvalidConfiguration, ShapeMismatch
from posefinder.inference import FramePipeline
from posefinder.models import BasePoseNet

from .conftest import MODEL_INPUT_SIZE, STRIDE


class FixedOutputNet(BasePoseNet):
    """Network returning precomputed outputs, optionally waiting for a release."""

    def __init__(self, prediction, gate=None):
        super().__init__(input_size=MODEL_INPUT_SIZE, output_stride=STRIDE)
        self.scale = torch.nn.Parameter(torch.ones(1))
        self.prediction = prediction
        self.gate = gate

    def forward(self, x):
        if self.gate is not None:
            self.gate.wait(timeout=5)
        return self.prediction


@pytest.fixture
def prediction(two_people_fields):
    return {
        'heatmap': torch.from_numpy(two_people_fields['heatmap']).unsqueeze(0),
        'offsets': torch.from_numpy(two_people_fields['offsets']).unsqueeze(0),
        'displacementFwd': torch.from_numpy(two_people_fields['forward_displacement']).unsqueeze(0),
        'displacementBwd': torch.from_numpy(two_people_fields['backward_displacement']).unsqueeze(0),
    }


def frame():
    return torch.zeros(1, 3, MODEL_INPUT_SIZE[1], MODEL_INPUT_SIZE[0])


def test_predict_fields_wraps_outputs(prediction):
    model = FixedOutputNet(prediction)

    output = model.predict_fields(frame())

    assert output.output_stride == STRIDE
    assert output.model_input_size == MODEL_INPUT_SIZE
    assert (output.height, output.width) == (17, 17)
    assert not model.training


def test_model_info(prediction):
    info = FixedOutputNet(prediction).get_model_info()

    assert info['model_name'] == 'FixedOutputNet'
    assert info['output_size'] == (17, 17)
    assert info['total_parameters'] == 1


def test_decodes_submitted_frame(prediction):
    pipeline = FramePipeline(FixedOutputNet(prediction))

    assert pipeline.submit(frame(), image_size=(514, 514))
    result = pipeline.get_result(timeout=5)
    pipeline.close()

    assert result.ok
    assert result.frame_index == 0
    assert len(result.poses) == 2
    assert result.elapsed >= 0.0


def test_drops_frames_while_busy(prediction):
    gate = threading.Event()
    pipeline = FramePipeline(FixedOutputNet(prediction, gate), algorithm='single')

    assert pipeline.submit(frame(), (257, 257))
    assert pipeline.is_busy
    assert not pipeline.submit(frame(), (257, 257))
    assert pipeline.dropped_frames == 1

    gate.set()
    result = pipeline.get_result(timeout=5)
    pipeline.close(timeout=5)

    assert result.frame_index == 0
    assert len(result.poses) == 1
    assert not pipeline.is_busy
    assert pipeline.submit(frame(), (257, 257))
    assert pipeline.get_result(timeout=5).frame_index == 1
    pipeline.close(timeout=5)


def test_errors_are_delivered_in_result(prediction):
    del prediction['displacementBwd']
    pipeline = FramePipeline(FixedOutputNet(prediction))

    pipeline.submit(frame(), (257, 257))
    result = pipeline.get_result(timeout=5)
    pipeline.close()

    assert not result.ok
    assert isinstance(result.error, ShapeMismatch)
    assert result.poses == []


def test_get_result_times_out():
    pipeline = FramePipeline(FixedOutputNet({}))
    assert pipeline.get_result(timeout=0.01) is None


def test_configure_validates(prediction):
    pipeline = FramePipeline(FixedOutputNet(prediction), DecoderConfiguration())

    pipeline.configure(max_pose_count=1)
    assert pipeline.configuration.max_pose_count == 1

    with pytest.raises(InvalidConfiguration):
        pipeline.configure(joint_confidence_threshold=3.0)


def test_close_waits_for_every_started_worker(prediction):
    pipeline = FramePipeline(FixedOutputNet(prediction), algorithm='single')

    assert pipeline.submit(frame(), (257, 257))
    assert pipeline.get_result(timeout=5).frame_index == 0
    # The first worker may still be running after releasing the busy flag
    assert pipeline.submit(frame(), (257, 257))
    workers = list(pipeline._workers)
    assert pipeline.get_result(timeout=5).frame_index == 1

    pipeline.close(timeout=5)

    assert workers
    assert not any(worker.is_alive() for worker in workers)
    assert pipeline._workers == []
