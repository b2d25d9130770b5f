import logging
import os
import shlex
import shutil
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)

MEMINFO_PATH = "/proc/meminfo"


def get_cache_directory() -> Path:
    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        cache_dir = Path(xdg_cache) / "mfetch"
    else:
        cache_dir = Path.home() / ".cache/mfetch"

    cache_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
    return cache_dir


def run_piped_command(command: str = "") -> tuple[int, str, str]:
    """
    Run a shell-like command with pipes using subprocess.

    Args:
        command (str): The pipeline command, e.g. "echo hi | grep h".

    Returns:
        (return_code, stdout, stderr)
    """
    # Split pipeline into stages
    parts = [shlex.split(cmd.strip()) for cmd in command.split("|")]
    processes: list[subprocess.Popen[bytes]] = []
    prev_stdout = None

    for i, part in enumerate(parts):
        try:
            proc = subprocess.Popen(
                part,
                stdin=prev_stdout,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE if i == len(parts) - 1 else subprocess.DEVNULL,
            )
        except FileNotFoundError as e:
            return 127, "", str(e)

        if prev_stdout:
            prev_stdout.close()
        prev_stdout = proc.stdout
        processes.append(proc)

    stdout, stderr = processes[-1].communicate()
    for p in processes[:-1]:
        _ = p.wait()

    return processes[-1].returncode, stdout.decode().strip(), stderr.decode().strip()


def which(binary_name: str) -> str | None:
    return shutil.which(binary_name)


def dmidecode_available() -> bool:
    return which("dmidecode") is not None


def is_root() -> bool:
    return os.geteuid() == 0


def read_dmi_table(dmi_type: int) -> str:
    """
    Return the "dmidecode --type N" dump, or an empty string if it can't be read.
    """
    command = f"dmidecode --type {dmi_type}"
    rc, stdout, stderr = run_piped_command(command)
    if rc != 0:
        logger.warning(f'"{command}" failed with exit code {rc}: {stderr}')
        return ""
    return stdout


def read_meminfo(path: str = MEMINFO_PATH) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"can't read {path}: {e}")
        return ""
