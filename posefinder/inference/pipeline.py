"""
Frame pipeline: runs inference and decoding off the caller's thread.
"""

import logging
import threading
import time
from dataclasses import dataclass, field, replace
from queue import Queue, Empty
from typing import List, Optional, Tuple, Union

import torch

from ..models.base_model import BasePoseNet
from ..pose.pose import PoseSet
from .builder import PoseBuilder
from .config import Algorithm, DecoderConfiguration

logger = logging.getLogger(__name__)


@dataclass
class DecodeResult:
    """Outcome of decoding one frame."""
    frame_index: int
    poses: PoseSet = field(default_factory=list)
    error: Optional[Exception] = None
    elapsed: float = 0.0  # seconds

    @property
    def ok(self) -> bool:
        return self.error is None


class FramePipeline:
    """
    Decodes a stream of frames, one at a time.

    A frame submitted while the previous one is still being processed is
    dropped. Only the newest unread result is kept.
    """

    def __init__(
        self,
        model: BasePoseNet,
        configuration: Optional[DecoderConfiguration] = None,
        algorithm: Union[str, Algorithm] = Algorithm.MULTIPLE
    ):
        """
        Initialize frame pipeline.

        Args:
            model: Network producing the four output tensors
            configuration: Decoder configuration (defaults if omitted)
            algorithm: 'single' or 'multiple'
        """
        self.model = model
        self.configuration = (configuration or DecoderConfiguration()).validate()
        self.algorithm = Algorithm.parse(algorithm)

        self.result_queue = Queue(maxsize=1)
        self._busy = threading.Lock()
        self._workers: List[threading.Thread] = []

        # Frame counters
        self.submitted_frames = 0
        self.dropped_frames = 0

    @property
    def is_busy(self) -> bool:
        return self._busy.locked()

    def configure(self, **changes):
        """Update decoder thresholds; applies from the next submitted frame."""
        self.configuration = replace(self.configuration, **changes).validate()

    def submit(self, input_tensor: torch.Tensor, image_size: Tuple[int, int]) -> bool:
        """
        Start processing a frame.

        Args:
            input_tensor: Preprocessed network input [1, C, H, W]
            image_size: Original frame size (width, height)

        Returns:
            False if the frame was dropped because a decode is outstanding
        """
        if not self._busy.acquire(blocking=False):
            self.dropped_frames += 1
            return False

        frame_index = self.submitted_frames
        self.submitted_frames += 1

        worker = threading.Thread(
            target=self._process,
            args=(frame_index, input_tensor, image_size, self.configuration, self.algorithm),
            daemon=True
        )
        self._workers = [t for t in self._workers if t.is_alive()]
        self._workers.append(worker)
        worker.start()
        return True

    def get_result(self, timeout: Optional[float] = None) -> Optional[DecodeResult]:
        """Next decoded result, or None if none arrives within the timeout."""
        try:
            return self.result_queue.get(timeout=timeout)
        except Empty:
            return None

    def close(self, timeout: Optional[float] = None):
        """Wait for every started worker, including ones that already released the busy flag."""
        for worker in self._workers:
            worker.join(timeout)
        self._workers = [t for t in self._workers if t.is_alive()]

    def _process(
        self,
        frame_index: int,
        input_tensor: torch.Tensor,
        image_size: Tuple[int, int],
        configuration: DecoderConfiguration,
        algorithm: Algorithm
    ):
        start_time = time.time()
        try:
            output = self.model.predict_fields(input_tensor)
            poses = PoseBuilder(output, configuration, image_size).estimate(algorithm)
            result = DecodeResult(frame_index, poses=poses)
        except Exception as e:
            logger.warning(f"Frame {frame_index} failed: {e}")
            result = DecodeResult(frame_index, error=e)
        result.elapsed = time.time() - start_time

        try:
            self._publish(result)
        finally:
            self._busy.release()

    def _publish(self, result: DecodeResult):
        # Single producer: the busy lock is held, so the slot can only empty
        try:
            self.result_queue.get_nowait()
        except Empty:
            pass
        self.result_queue.put_nowait(result)
