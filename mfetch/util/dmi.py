import logging
import re
from collections import Counter
from typing import Iterable, Iterator

from dacite import Config, from_dict
from mfetch.data.memory_info import (
    SENTINEL,
    DmiInfo,
    MemoryArrayInfo,
    MemoryModuleRecord,
)
from mfetch.util import wtime

logger = logging.getLogger(__name__)

EMPTY_SLOT = "No Module Installed"
MIXED = "Mixed"

# dmidecode key -> MemoryModuleRecord field
MODULE_FIELDS: dict[str, str] = {
    "Locator": "slot_locator",
    "Bank Locator": "bank_locator_raw",
    "Size": "size",
    "Manufacturer": "manufacturer",
    "Part Number": "part_number",
    "Serial Number": "serial_number",
    "Form Factor": "form_factor",
    "Type": "memory_type",
    "Speed": "speed",
    "Data Width": "data_width",
    "Total Width": "total_width",
    "Configured Voltage": "configured_voltage",
}

# dmidecode key -> MemoryArrayInfo field
ARRAY_FIELDS: dict[str, str] = {
    "Maximum Capacity": "max_capacity",
    "Number Of Devices": "number_of_slots",
    "Error Correction Type": "ecc_type",
}

CHANNEL_PATTERN = re.compile(r"^P(\d+) CHANNEL (.+)$")
BANK_PATTERN = re.compile(r"^P(\d+) BANK (\d+)$")


class LabelOccurrenceState:
    """
    Per-pass occurrence counters for bank display labels.
    """

    def __init__(self):
        self.counts: Counter[str] = Counter()

    def increment(self, label: str) -> int:
        self.counts[label] += 1
        return self.counts[label]

    def reset(self):
        self.counts.clear()


def split_blocks(raw_text: str) -> Iterator[str]:
    """
    Yield the blank-line separated records of a dmidecode dump, in order.
    """
    block: list[str] = []
    for line in raw_text.splitlines():
        if line.strip():
            block.append(line)
        elif block:
            yield "\n".join(block)
            block = []
    if block:
        yield "\n".join(block)


def extract_field(block: str, key: str) -> str:
    """
    Return the value of the first "<key>:" line in the block, or the sentinel.
    An empty value is reported as the sentinel as well.
    """
    pattern = re.compile(rf"^{re.escape(key)}:\s*(.*)$")
    for line in block.splitlines():
        match = pattern.match(line.lstrip())
        if match:
            value = match.group(1).strip()
            return value if value else SENTINEL
    return SENTINEL


def is_populated_module(block: str) -> bool:
    size = extract_field(block, "Size")
    return size not in (SENTINEL, EMPTY_SLOT)


def normalize_bank_locator(raw: str) -> str:
    """
    Rewrite socket-prefixed bank locators ("P0 CHANNEL A", "P1 BANK 3") as
    "CPU 0 / Channel A" and "CPU 1 / Bank 3". Anything else is returned with
    its whitespace collapsed.
    """
    if not raw or raw == SENTINEL:
        return SENTINEL

    locator = " ".join(raw.split())
    if not locator:
        return SENTINEL

    match = CHANNEL_PATTERN.match(locator)
    if match:
        return f"CPU {match.group(1)} / Channel {match.group(2)}"

    match = BANK_PATTERN.match(locator)
    if match:
        return f"CPU {match.group(1)} / Bank {match.group(2)}"

    return locator


def decorate_label(label: str, state: LabelOccurrenceState) -> str:
    if not label or label == SENTINEL:
        return label

    occurrence = state.increment(label)
    if occurrence > 1:
        return f"{label} (module #{occurrence})"
    return label


def resolve_consensus(values: Iterable[str]) -> str:
    """
    Collapse a set of observed values into "-" (nothing known), the single
    distinct value, or "Mixed".
    """
    distinct = {value for value in values if value and value != SENTINEL}
    if not distinct:
        return SENTINEL
    if len(distinct) == 1:
        return distinct.pop()
    return MIXED


def resolve_type_consensus(records: Iterable[MemoryModuleRecord]) -> str:
    return resolve_consensus(record.memory_type for record in records)


def resolve_speed_consensus(records: Iterable[MemoryModuleRecord]) -> str:
    return resolve_consensus(record.speed for record in records)


def parse_module(block: str, state: LabelOccurrenceState) -> MemoryModuleRecord:
    data: dict[str, str] = {
        attr: extract_field(block, key) for key, attr in MODULE_FIELDS.items()
    }
    data["bank_locator_display"] = decorate_label(
        normalize_bank_locator(data["bank_locator_raw"]), state
    )

    return from_dict(
        data_class=MemoryModuleRecord,
        data=data,
        config=Config(cast=[str], strict=True),
    )


def parse_modules(raw_text: str) -> list[MemoryModuleRecord]:
    """
    Parse a "dmidecode --type 17" dump into one record per populated slot.
    """
    modules: list[MemoryModuleRecord] = []
    state = LabelOccurrenceState()
    skipped = 0

    for block in split_blocks(raw_text):
        if not is_populated_module(block):
            skipped += 1
            continue
        modules.append(parse_module(block, state))

    logger.debug(f"parsed {len(modules)} module(s), skipped {skipped} block(s)")
    return modules


def parse_array(
    raw_text: str, modules: list[MemoryModuleRecord]
) -> MemoryArrayInfo:
    """
    Parse the first physical memory array record of a "dmidecode --type 16"
    dump and attach the type and speed agreed on by the modules.
    """
    data: dict[str, str] = {attr: SENTINEL for attr in ARRAY_FIELDS.values()}

    for block in split_blocks(raw_text):
        if extract_field(block, "Maximum Capacity") == SENTINEL:
            continue
        data = {attr: extract_field(block, key) for key, attr in ARRAY_FIELDS.items()}
        break
    else:
        if raw_text.strip():
            logger.warning("no physical memory array record found in dmidecode output")

    data["supported_type"] = resolve_type_consensus(modules)
    data["supported_speed"] = resolve_speed_consensus(modules)

    return from_dict(
        data_class=MemoryArrayInfo,
        data=data,
        config=Config(cast=[str], strict=True),
    )


def get_dmi_info(module_text: str, array_text: str) -> DmiInfo:
    """
    Build the DMI half of the report from the type 17 and type 16 dumps.
    Empty dumps mean the source was unavailable.
    """
    if not module_text.strip() and not array_text.strip():
        return DmiInfo(
            success=False,
            error="The physical memory information is not available.",
        )

    modules = parse_modules(module_text)
    return DmiInfo(
        success=True,
        array=parse_array(array_text, modules),
        modules=modules,
        updated=wtime.get_human_timestamp(),
    )
