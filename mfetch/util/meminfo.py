import logging
from typing import cast

import jc
from jc.exceptions import ParseError
from mfetch.data.memory_info import MemoryUsageInfo, MemoryUsageSample
from mfetch.util import wtime
from mfetch.util.conversion import clamp, kb_to_gb

logger = logging.getLogger(__name__)

BAR_WIDTH = 40
SWAP_EPSILON_GB = 0.01


def parse_meminfo(text: str) -> dict[str, int]:
    """
    Parse /proc/meminfo text into kilobyte counters with jc's proc_meminfo
    parser. Unparseable text yields an empty dict.
    """
    try:
        return cast(dict[str, int], jc.parse("proc_meminfo", text, quiet=True))
    except (ValueError, ParseError) as e:
        logger.warning(f"could not parse meminfo counters: {e}")
        return {}


def compute_usage(
    total_kb: int | None, available_kb: int | None
) -> MemoryUsageSample | None:
    """
    Summarize a total/available kilobyte pair. Returns None when the total is
    not positive, since no meaningful percentage exists.
    """
    total_kb = total_kb or 0
    available_kb = max(available_kb or 0, 0)
    if total_kb <= 0:
        return None

    # available can briefly exceed total between counter reads
    used_kb = max(total_kb - available_kb, 0)
    percentage = round(clamp(used_kb / total_kb * 100, 0, 100), 2)

    return MemoryUsageSample(
        total_gb=kb_to_gb(total_kb),
        used_gb=kb_to_gb(used_kb),
        available_gb=kb_to_gb(available_kb),
        percentage=percentage,
    )


def compute_swap_usage(
    total_kb: int | None, free_kb: int | None
) -> MemoryUsageSample | None:
    """
    Like compute_usage(), but negligible swap activity is reported as absent.
    """
    sample = compute_usage(total_kb, free_kb)
    if sample is None or sample.used_gb <= SWAP_EPSILON_GB:
        return None
    return sample


def bar_fill(percentage: float | None, width: int = BAR_WIDTH) -> int:
    """
    Number of filled cells for a usage bar of the given width.
    """
    if percentage is None or width <= 0:
        return 0
    return int(clamp(round(percentage / 100 * width), 0, width))


def get_memory_usage(text: str) -> MemoryUsageInfo:
    if not text.strip():
        return MemoryUsageInfo(
            success=False,
            error="Can't read /proc/meminfo.",
        )

    counters = parse_meminfo(text)
    ram = compute_usage(counters.get("MemTotal", 0), counters.get("MemAvailable", 0))
    if ram is None:
        logger.warning(f"unusable MemTotal value: {counters.get('MemTotal', 0)}")
        return MemoryUsageInfo(
            success=False,
            error="No memory usage summary available.",
        )

    return MemoryUsageInfo(
        success=True,
        ram=ram,
        swap=compute_swap_usage(counters.get("SwapTotal", 0), counters.get("SwapFree", 0)),
        updated=wtime.get_human_timestamp(),
    )
