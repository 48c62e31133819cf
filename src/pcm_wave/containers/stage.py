from __future__ import annotations

import importlib
import logging
import pkgutil
from pathlib import Path

from pcm_wave.pcm import PCM

from .config.stage_config import Config

logger = logging.getLogger("pcm_wave.containers")


def available_modules() -> list[str]:
    pkg = importlib.import_module(f"{__package__}.modules")
    names = [m.name for m in pkgutil.iter_modules(pkg.__path__)]
    return sorted([n for n in names if not n.startswith("_")])


def _import_container_module(name: str):
    if not isinstance(name, str) or not name:
        raise ValueError("cfg.module must be a non-empty string")
    return importlib.import_module(f"{__package__}.modules.{name}")


def _resolve_module_and_cfg(cfg: Config):
    mod = _import_container_module(cfg.module)
    if not hasattr(mod, "Config"):
        raise AttributeError(f"container module '{cfg.module}' missing Config")
    if not hasattr(mod, "tx") or not hasattr(mod, "rx"):
        raise AttributeError(f"container module '{cfg.module}' missing tx/rx")

    module_cfg = cfg.module_cfg if cfg.module_cfg is not None else mod.Config()
    return mod, module_cfg


def tx(pcm: PCM, cfg: Config) -> PCM:
    """
    TX-side container operation.

    - If cfg.enabled, write pcm to cfg.tx_path with the selected module.
    - Always returns pcm unchanged (containers stage is side-effect only).
    """
    if not cfg.enabled:
        return pcm

    if cfg.tx_path is None:
        raise ValueError("containers.tx: cfg.tx_path is None but stage is enabled")

    mod, module_cfg = _resolve_module_and_cfg(cfg)
    p = Path(cfg.tx_path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("wb") as f:
        mod.tx(pcm, f, cfg=module_cfg)

    logger.debug("containers.tx: wrote %d frames to %s (%s)", len(pcm.frames), p, cfg.module)
    return pcm


def rx(cfg: Config) -> PCM:
    """
    RX-side container operation.

    - If cfg.enabled, read a PCM from cfg.rx_path with the selected module.
    - If cfg.sample_rate is set, the decoded rate must match it.
    """
    if not cfg.enabled:
        raise ValueError("containers.rx: disabled; nothing to read")

    if cfg.rx_path is None:
        raise ValueError("containers.rx: cfg.rx_path is None but stage is enabled")

    mod, module_cfg = _resolve_module_and_cfg(cfg)
    with Path(cfg.rx_path).open("rb") as f:
        pcm = mod.rx(f, cfg=module_cfg)

    fs = pcm.parameters.sample_rate
    if cfg.sample_rate is not None and int(fs) != int(cfg.sample_rate):
        raise ValueError(f"containers.rx: fs={fs} does not match cfg.sample_rate={cfg.sample_rate}")

    return pcm


class Stage:
    """
    Stage wrapper (run_tx/run_rx) over tx()/rx().
    PCM travels in ctx["tx_pcm"] / ctx["rx_pcm"]; data passes through untouched.
    """
    name = "containers"

    def __init__(self, cfg: Config):
        self.cfg = cfg

    def run_tx(self, data: bytes, ctx: dict) -> tuple[bytes, dict]:
        pcm = ctx.get("tx_pcm", None)
        if pcm is not None:
            ctx["tx_pcm"] = tx(pcm, self.cfg)
        return data, ctx

    def run_rx(self, data: bytes, ctx: dict) -> tuple[bytes, dict]:
        pcm = rx(self.cfg)
        ctx["rx_pcm"] = pcm
        ctx["sample_rate"] = pcm.parameters.sample_rate
        return data, ctx
