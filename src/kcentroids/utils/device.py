"""
Device selection utilities.
"""

from typing import Optional, Union
import torch
import warnings


def get_default_device() -> torch.device:
    """Get the best available device (cuda, then mps, then cpu)."""
    if torch.cuda.is_available():
        return torch.device('cuda')
    elif hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
        return torch.device('mps')
    else:
        return torch.device('cpu')


def parse_device(device: Optional[Union[str, torch.device]] = None) -> torch.device:
    """Parse device specification.

    Args:
        device: Device specification
            - None: CPU
            - 'auto': Use best available
            - 'cpu', 'cuda', 'cuda:X', 'mps'
            - torch.device: Use as-is

    Returns:
        Parsed device
    """
    if device is None:
        return torch.device('cpu')

    if device == 'auto':
        return get_default_device()

    if isinstance(device, torch.device):
        return device

    if isinstance(device, str):
        if device == 'cpu':
            return torch.device('cpu')
        elif device.startswith('cuda'):
            if not torch.cuda.is_available():
                warnings.warn("CUDA not available, falling back to CPU")
                return torch.device('cpu')
            return torch.device(device)
        elif device == 'mps':
            if hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
                return torch.device('mps')
            warnings.warn("MPS not available, falling back to CPU")
            return torch.device('cpu')
        raise ValueError(f"Unknown device: {device}")

    raise TypeError(f"Invalid device type: {type(device)}")
