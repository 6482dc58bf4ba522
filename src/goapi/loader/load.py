from __future__ import annotations

import json
import logging
import os
import subprocess
import tempfile
from pathlib import Path

from ..config import LoaderConfig
from ..errors import LoadError
from ..model import Package
from .decode import decode_packages
from .gosrc import loader_go_source

logger = logging.getLogger(__name__)


def load_packages(patterns: list[str], config: LoaderConfig | None = None) -> list[Package]:
    """Type-check the packages matching `patterns` and return their resolved models.

    Packages are loaded by a small Go helper (see `loader_go_source`) run with
    the configured Go toolchain. Any listing, parse or type-check failure
    raises `LoadError`; a partial result is never returned.
    """
    if config is None:
        config = LoaderConfig.from_env()
    if not patterns:
        raise LoadError("no packages to load")

    with tempfile.TemporaryDirectory(prefix="goapi-loader-") as td:
        helper_dir = Path(td)
        (helper_dir / "go.mod").write_text(
            "\n".join(
                [
                    "module goapi.loader",
                    "",
                    "go 1.22",
                    "",
                ]
            ),
            encoding="utf-8",
        )
        (helper_dir / "main.go").write_text(loader_go_source(), encoding="utf-8")

        cmd = [config.go, "run", ".", "--go", config.go, "--dir", str(Path(config.dir).resolve())]
        if config.tags:
            cmd += ["--tags", ",".join(config.tags)]
        cmd += ["--", *patterns]
        stdout = _run(cmd, cwd=helper_dir, env=_helper_env(config))

    try:
        obj = json.loads(stdout)
    except ValueError as e:
        raise LoadError(f"failed to parse loader output: {e}\n{stdout[:2000]}") from e

    pkgs = decode_packages(obj)
    logger.debug("loaded %d package(s) for %s", len(pkgs), " ".join(patterns))
    return pkgs


def _helper_env(config: LoaderConfig) -> dict[str, str] | None:
    if not config.env:
        return None
    env = dict(os.environ)
    env.update(config.env)
    return env


def _run(cmd: list[str], *, cwd: Path, env: dict[str, str] | None = None) -> str:
    logger.debug("running %s (cwd=%s)", " ".join(cmd), cwd)
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except FileNotFoundError as e:
        raise LoadError(
            f"Go toolchain not found (`{cmd[0]}` is missing from PATH). "
            "Install Go or point GOAPI_GO at the go binary."
        ) from e
    if proc.returncode != 0:
        raise LoadError(f"failed to load packages\n{proc.stderr.strip()}")
    if proc.stderr.strip():
        logger.debug("loader stderr:\n%s", proc.stderr.strip())
    return proc.stdout
