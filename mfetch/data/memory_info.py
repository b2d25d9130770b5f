from dataclasses import dataclass, field

SENTINEL = "-"


@dataclass(frozen=True)
class MemoryModuleRecord:
    slot_locator: str = SENTINEL
    bank_locator_raw: str = SENTINEL
    bank_locator_display: str = SENTINEL
    size: str = SENTINEL
    manufacturer: str = SENTINEL
    part_number: str = SENTINEL
    serial_number: str = SENTINEL
    form_factor: str = SENTINEL
    memory_type: str = SENTINEL
    speed: str = SENTINEL
    data_width: str = SENTINEL
    total_width: str = SENTINEL
    configured_voltage: str = SENTINEL


@dataclass(frozen=True)
class MemoryArrayInfo:
    max_capacity: str = SENTINEL
    number_of_slots: str = SENTINEL
    ecc_type: str = SENTINEL
    supported_type: str = SENTINEL
    supported_speed: str = SENTINEL


@dataclass(frozen=True)
class MemoryUsageSample:
    total_gb: float = 0.0
    used_gb: float = 0.0
    available_gb: float = 0.0
    percentage: float = 0.0


@dataclass
class MemoryUsageInfo:
    success: bool = False
    error: str | None = None
    ram: MemoryUsageSample | None = None
    swap: MemoryUsageSample | None = None
    updated: str | None = None


@dataclass
class DmiInfo:
    success: bool = False
    error: str | None = None
    array: MemoryArrayInfo = field(default_factory=MemoryArrayInfo)
    modules: list[MemoryModuleRecord] = field(default_factory=list)
    updated: str | None = None
