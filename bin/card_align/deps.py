"""Check that external tools are on PATH, with a best-effort conda install."""
from __future__ import annotations

import logging
import shutil
import subprocess

logger = logging.getLogger(__name__)

CONDA_CHANNELS = ("bioconda", "conda-forge")


def build_install_command(tool: str, conda: str = "conda") -> list[str]:
    """Build the conda command that installs a missing tool."""
    cmd = [conda, "install", "-y"]
    for channel in CONDA_CHANNELS:
        cmd.extend(["-c", channel])
    cmd.append(tool)
    return cmd


def install_tool(tool: str) -> None:
    """Try to install a tool with conda. Never raises on failure."""
    conda = shutil.which("conda")
    if conda is None:
        logger.warning("%s is missing and conda is not available; install it manually", tool)
        return

    cmd = build_install_command(tool, conda)
    logger.info("Installing %s: %s", tool, " ".join(cmd))
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as e:
        logger.warning("Could not run installer for %s: %s", tool, e)
        return
    if proc.returncode != 0:
        logger.warning("Installer for %s exited with status %d", tool, proc.returncode)
        if proc.stderr:
            logger.debug(proc.stderr.strip())
    else:
        logger.info("Installer for %s finished", tool)


def check_dependencies(tools: list[str]) -> list[str]:
    """Verify each tool is invocable; attempt to install missing ones.

    The install outcome is not re-checked. Returns the tools that were missing.
    """
    missing: list[str] = []
    for tool in tools:
        path = shutil.which(tool)
        if path:
            logger.info("Found %s at %s", tool, path)
            continue
        logger.warning("%s not found on PATH", tool)
        missing.append(tool)
        install_tool(tool)
    return missing
