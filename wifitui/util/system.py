import os
import subprocess
from pathlib import Path

APP_NAME = "wifi-tui"


def run_command(args: list[str]) -> tuple[int, str, str]:
    """
    Run a command without a shell and wait for it to finish.

    Args:
        args (list[str]): The argv to execute, e.g. ["nmcli", "-t", "device"].

    Returns:
        (return_code, stdout, stderr) with both streams decoded and stripped.

    Raises:
        OSError: If the program can't be launched (missing, not executable).
    """
    proc = subprocess.Popen(
        args,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )
    stdout, stderr = proc.communicate()

    return (
        proc.returncode,
        stdout.decode(errors="replace").strip(),
        stderr.decode(errors="replace").strip(),
    )


def _xdg_directory(variable: str, fallback: str) -> Path:
    base = os.environ.get(variable)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / fallback / APP_NAME


def get_cache_directory() -> Path:
    cache_dir = _xdg_directory("XDG_CACHE_HOME", ".cache")

    if not os.path.exists(cache_dir):
        os.makedirs(cache_dir, mode=0o700, exist_ok=True)

    return cache_dir


def get_config_directory() -> Path:
    return _xdg_directory("XDG_CONFIG_HOME", ".config")
