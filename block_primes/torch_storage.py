"""BitField backed by a torch.bool tensor; lets blocks be sieved on CUDA or MPS."""

import numpy as np
import torch

from .storage import BitField


def pick_device(name: str | None = None) -> torch.device:
    """'auto' (or None) prefers CUDA, then MPS, then falls back to CPU."""
    if name is None or name == "auto":
        if torch.cuda.is_available():
            return torch.device("cuda")
        if torch.backends.mps.is_available():
            return torch.device("mps")
        return torch.device("cpu")
    return torch.device(name)


class TorchField(BitField):
    def __init__(self, size: int, device: torch.device | str = "cpu"):
        super().__init__(size)
        self.device = torch.device(device)
        self.mask = torch.zeros(size, dtype=torch.bool, device=self.device)

    def mark(self, start, step=1, stop=None):
        stop = self.size if stop is None else min(stop, self.size)
        if start >= stop:
            return
        self.mask[start:stop:step] = True  # strided store on device

    def is_marked(self, offset):
        return bool(self.mask[offset].item())

    def unmarked(self):
        idx = torch.nonzero(~self.mask, as_tuple=False).squeeze(1)
        return idx.to("cpu").numpy().astype(np.int64)
