from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Config:
    """
    Containers stage config.

    Design:
      - tx(pcm, cfg): writes pcm to cfg.tx_path through the selected module if enabled
      - rx(cfg): reads a PCM from cfg.rx_path through the selected module if enabled

    module: container module name (e.g. "wave", "raw")
    module_cfg: instance of that module's Config (or None -> defaults)
    """
    enabled: bool = True

    module: str = "wave"
    module_cfg: Any = None

    # Where to write/read
    tx_path: Optional[str] = None
    rx_path: Optional[str] = None

    # validated on read when set
    sample_rate: Optional[int] = None
