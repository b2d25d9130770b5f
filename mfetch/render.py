import click
from mfetch import glyphs
from mfetch.data.memory_info import DmiInfo, MemoryUsageInfo, MemoryUsageSample
from mfetch.util.conversion import float_to_pct, pad_float
from mfetch.util.meminfo import BAR_WIDTH, bar_fill


def style(text: str, color: bool, **kwargs) -> str:
    return click.style(text, **kwargs) if color else text


def render_bar(
    label: str,
    sample: MemoryUsageSample,
    fg: str,
    width: int = BAR_WIDTH,
    color: bool = True,
) -> str:
    """
    Render a usage bar such as "  Usage: [####----] 50.00%".
    """
    filled = bar_fill(sample.percentage, width)
    filled_segment = style(glyphs.bar_filled * filled, color, fg=fg)
    empty_segment = style(glyphs.bar_empty * (width - filled), color, fg="bright_black")
    return f"  {label}: [{filled_segment}{empty_segment}] {float_to_pct(sample.percentage)}"


def render_usage(
    usage_info: MemoryUsageInfo, width: int = BAR_WIDTH, color: bool = True
) -> list[str]:
    lines: list[str] = []

    if not usage_info.success or usage_info.ram is None:
        message = usage_info.error or "No memory usage summary available."
        return [style(f"  ERROR: {message}", color, fg="red"), ""]

    for title, sample, fg in [
        ("RAM", usage_info.ram, "magenta"),
        ("swap", usage_info.swap, "cyan"),
    ]:
        if sample is None:
            continue
        lines.append(
            f"  {style(f'Total {title}', color, fg='yellow')}: {pad_float(sample.total_gb)} GB\t"
            f"{style('Used', color, fg='yellow')}: {pad_float(sample.used_gb)} GB\t"
            f"{style('Available', color, fg='yellow')}: {pad_float(sample.available_gb)} GB"
        )
        lines.append(render_bar("Usage", sample, fg, width=width, color=color))
        lines.append("")

    return lines


def render_array(dmi_info: DmiInfo, color: bool = True) -> list[str]:
    lines = [style(f"{glyphs.memory_info} Memory info", color, fg="cyan", bold=True)]

    if not dmi_info.success:
        message = dmi_info.error or "The physical memory information is not available."
        lines.append(style(f"  {message}", color, fg="yellow"))
        lines.append("")
        return lines

    array = dmi_info.array
    for key, value in [
        ("Max. RAM size", f"{array.max_capacity} ({array.number_of_slots} slots)"),
        ("Memory type", array.supported_type),
        ("Speed", array.supported_speed),
        ("Error correction (ECC)", array.ecc_type),
    ]:
        lines.append(f"  {style(key, color, fg='yellow')}: {value}")
    lines.append("")

    return lines


def render_modules(
    dmi_info: DmiInfo, dmidecode_available: bool = True, color: bool = True
) -> list[str]:
    lines = [style(f"{glyphs.memory_modules} Memory modules (DIMM)", color, fg="cyan", bold=True)]

    if not dmidecode_available:
        lines.append(
            style(
                "  The command 'dmidecode' is not available. Skipping module details.",
                color,
                fg="yellow",
            )
        )
        lines.append("")
        return lines

    if not dmi_info.modules:
        lines.append(style("  No memory modules were identified.", color, fg="yellow"))
        lines.append("")
        return lines

    for module in dmi_info.modules:
        slot = style(f"{glyphs.module_slot} Slot", color, fg="magenta")
        bank = style(f"{glyphs.module_bank} Bank", color, fg="magenta")
        lines.append(f"  {slot}: {module.slot_locator:<20} {bank}: {module.bank_locator_display}")
        for icon, key, value in [
            (glyphs.module_size, "Size", module.size),
            (glyphs.manufacturer, "Manufacturer", module.manufacturer),
            (glyphs.part_number, "Part Number", module.part_number),
            (glyphs.serial_number, "Serial Number", module.serial_number),
            (glyphs.form_factor, "Form Factor", module.form_factor),
            (glyphs.module_type, "Type", module.memory_type),
            (glyphs.module_speed, "Speed", module.speed),
            (glyphs.voltage, "Voltage", module.configured_voltage),
        ]:
            lines.append(f"  {style(f'{icon} {key}', color, fg='magenta')}: {value}")
        lines.append("")

    return lines


def render_report(
    dmi_info: DmiInfo,
    usage_info: MemoryUsageInfo,
    dmidecode_available: bool = True,
    width: int = BAR_WIDTH,
    color: bool = True,
) -> str:
    lines: list[str] = [
        style(f"{glyphs.header} mfetch", color, fg="green", bold=True)
        + " "
        + style("[memory-focused system info tool]", color, fg="bright_black"),
        "",
    ]
    lines.extend(render_array(dmi_info, color=color))
    lines.extend(render_usage(usage_info, width=width, color=color))
    lines.extend(
        render_modules(dmi_info, dmidecode_available=dmidecode_available, color=color)
    )
    return "\n".join(lines)
