from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path


@dataclass(frozen=True)
class LoaderConfig:
    """How the Go toolchain is invoked to load packages.

    Override defaults with `GOAPI_GO` (Go binary) and `GOAPI_DIR` (directory
    package patterns are resolved from).
    """

    go: str = "go"
    dir: Path = field(default_factory=Path.cwd)
    tags: tuple[str, ...] = ()
    env: dict[str, str] | None = None

    @classmethod
    def from_env(cls) -> "LoaderConfig":
        go = os.environ.get("GOAPI_GO") or "go"
        override = os.environ.get("GOAPI_DIR")
        work_dir = Path(override) if override else Path.cwd()
        return cls(go=go, dir=work_dir)

    def with_overrides(
        self,
        *,
        dir: str | Path | None = None,
        tags: str | None = None,
    ) -> "LoaderConfig":
        cfg = self
        if dir is not None:
            cfg = replace(cfg, dir=Path(dir))
        if tags:
            cfg = replace(cfg, tags=tuple(t.strip() for t in tags.split(",") if t.strip()))
        return cfg
