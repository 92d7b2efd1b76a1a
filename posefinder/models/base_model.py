"""
Base class for PoseNet-style networks feeding the decoder.
"""

import torch
import torch.nn as nn
from abc import ABC, abstractmethod
from typing import Dict, Tuple, Any

from .output import PoseNetOutput


class BasePoseNet(nn.Module, ABC):
    """
    Network producing heatmap, offset and displacement outputs.
    
    The decoder treats the network as a black box; subclasses only have to
    return the four named outputs from forward().
    """
    
    def __init__(
        self,
        input_size: Tuple[int, int] = (513, 513),
        output_stride: int = 16
    ):
        """
        Initialize base model.
        
        Args:
            input_size: Input image size (width, height)
            output_stride: Output stride of the model
        """
        super().__init__()
        self.input_size = input_size
        self.output_stride = output_stride
        self.output_size = (
            (input_size[1] - 1) // output_stride + 1,
            (input_size[0] - 1) // output_stride + 1
        )
    
    @abstractmethod
    def forward(self, x: torch.Tensor) -> Dict[str, torch.Tensor]:
        """
        Forward pass of the model.
        
        Args:
            x: Input tensor [1, C, H, W]
        
        Returns:
            Dictionary with 'heatmap', 'offsets', 'displacementFwd' and
            'displacementBwd' tensors
        """
        pass
    
    def predict_fields(self, x: torch.Tensor) -> PoseNetOutput:
        """Run the network and wrap its outputs for decoding."""
        self.eval()
        with torch.no_grad():
            prediction = self(x)
        
        return PoseNetOutput.from_prediction(
            prediction,
            model_input_size=self.input_size,
            output_stride=self.output_stride
        )
    
    def get_model_info(self) -> Dict[str, Any]:
        """
        Get model information.
        
        Returns:
            Dictionary containing model information
        """
        total_params = sum(p.numel() for p in self.parameters())
        
        return {
            'model_name': self.__class__.__name__,
            'input_size': self.input_size,
            'output_stride': self.output_stride,
            'output_size': self.output_size,
            'total_parameters': total_params,
            'model_size_mb': total_params * 4 / (1024 * 1024)  # Assuming float32
        }
