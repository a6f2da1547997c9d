"""
sRGB to CIE Lab conversion on tensors, used for perceptual clustering.
"""

from __future__ import annotations

import torch

# Linear sRGB -> XYZ, D65 white point.
_SRGB_TO_XYZ = torch.tensor([
    [0.4124564, 0.3575761, 0.1804375],
    [0.2126729, 0.7151522, 0.0721750],
    [0.0193339, 0.1191920, 0.9503041],
])
_D65_WHITE = torch.tensor([0.95047, 1.00000, 1.08883])

_EPSILON = 216.0 / 24389.0
_KAPPA = 24389.0 / 27.0


def srgb_to_linear(rgb: torch.Tensor) -> torch.Tensor:
    return torch.where(rgb <= 0.04045, rgb / 12.92, ((rgb + 0.055) / 1.055) ** 2.4)


def srgb_to_lab(rgb: torch.Tensor) -> torch.Tensor:
    """Convert ``(N, 3)`` sRGB samples in [0, 1] to CIE Lab.

    Returns:
        ``(N, 3)`` tensor of L* in [0, 100] and a*, b* roughly in [-128, 127].
    """
    matrix = _SRGB_TO_XYZ.to(device=rgb.device, dtype=rgb.dtype)
    white = _D65_WHITE.to(device=rgb.device, dtype=rgb.dtype)

    xyz = (srgb_to_linear(rgb) @ matrix.T) / white
    f = torch.where(xyz > _EPSILON, xyz.clamp(min=0.0) ** (1.0 / 3.0), (_KAPPA * xyz + 16.0) / 116.0)

    lightness = 116.0 * f[:, 1] - 16.0
    a = 500.0 * (f[:, 0] - f[:, 1])
    b = 200.0 * (f[:, 1] - f[:, 2])
    return torch.stack([lightness, a, b], dim=1)
