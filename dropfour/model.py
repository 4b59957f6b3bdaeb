"""Learned per-column value model and the catalog of available model files."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import List

import torch
import torch.nn as nn

from dropfour.engine import Board, Connect4Config


class CatalogError(ValueError):
    """Raised when a model catalog cannot be read."""


@dataclass(frozen=True)
class ModelConfig:
    channels: int = 64


@dataclass(frozen=True)
class ModelEntry:
    file: str
    name: str


def pick_device(device: str) -> torch.device:
    if device == "auto":
        return torch.device("cuda" if torch.cuda.is_available() else "cpu")
    return torch.device(device)


def encode_board(board: Board, player: int) -> torch.Tensor:
    """
    Encode the board from `player`'s point of view as a single plane.

    +1 = player's pieces, -1 = opponent's pieces, 0 = empty.
    Returns shape (1, rows, cols), dtype float32.
    """

    x = board.cells.astype("float32") * float(player)
    return torch.from_numpy(x).unsqueeze(0)


class QValueNet(nn.Module):
    """
    Small convolutional network scoring every column.

    Output is one value per column; higher means the model prefers dropping
    there. Legality is not the network's concern; callers mask full columns.
    """

    def __init__(self, *, cfg: Connect4Config, model_cfg: ModelConfig) -> None:
        super().__init__()
        self.cfg = cfg
        self.model_cfg = model_cfg

        channels = model_cfg.channels
        self.trunk = nn.Sequential(
            nn.Conv2d(1, channels, kernel_size=3, padding=1),
            nn.ReLU(),
            nn.Conv2d(channels, channels, kernel_size=3, padding=1),
            nn.ReLU(),
        )
        self.q_head = nn.Sequential(
            nn.Flatten(),
            nn.Linear(channels * cfg.rows * cfg.cols, channels),
            nn.ReLU(),
            nn.Linear(channels, cfg.cols),
        )

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        """
        x: (B, 1, H, W)
        returns q_values: (B, W)
        """

        return self.q_head(self.trunk(x))


def save_model(path: Path, model: QValueNet) -> None:
    payload = {
        "cfg": {"rows": model.cfg.rows, "cols": model.cfg.cols, "k": model.cfg.k},
        "model_cfg": {"channels": model.model_cfg.channels},
        "state_dict": model.state_dict(),
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    torch.save(payload, path)


def load_model(path: Path, *, device: torch.device) -> QValueNet:
    payload = torch.load(path, map_location=device)
    cfg = Connect4Config(**payload["cfg"])
    cfg.validate()
    model_cfg = ModelConfig(**payload["model_cfg"])
    model = QValueNet(cfg=cfg, model_cfg=model_cfg)
    model.load_state_dict(payload["state_dict"])
    model.to(device)
    model.eval()
    return model


def load_catalog(path: Path) -> List[ModelEntry]:
    """Read a JSON list of {"file", "name"} objects; incomplete entries are skipped."""

    try:
        raw = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogError(f"failed to read model catalog {path}: {exc}") from exc
    if not isinstance(raw, list):
        raise CatalogError(f"model catalog {path} must be a JSON list")

    entries: List[ModelEntry] = []
    for item in raw:
        if isinstance(item, dict) and item.get("file") and item.get("name"):
            entries.append(ModelEntry(file=str(item["file"]), name=str(item["name"])))
    return entries
