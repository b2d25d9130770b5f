import json
import sys
from dataclasses import asdict

import click
from mfetch import render
from mfetch.util import dmi, log, meminfo, system

context_settings = dict(help_option_names=["-h", "--help"])

DMI_TYPE_MEMORY_ARRAY = 16
DMI_TYPE_MEMORY_DEVICE = 17


@click.command(
    help="Show memory modules and memory usage from dmidecode(8) and /proc/meminfo",
    context_settings=context_settings,
)
@click.option(
    "-w",
    "--bar-width",
    default=meminfo.BAR_WIDTH,
    show_default=True,
    type=click.IntRange(min=1),
    envvar="MFETCH_BAR_WIDTH",
    help="Width of the usage bars",
)
@click.option(
    "-m",
    "--meminfo",
    "meminfo_path",
    default=system.MEMINFO_PATH,
    show_default=True,
    envvar="MFETCH_MEMINFO",
    help="Path of the kernel memory counter file",
)
@click.option("-j", "--json", "as_json", default=False, is_flag=True, help="Output the report as JSON")
@click.option("--no-color", default=False, is_flag=True, envvar="MFETCH_NO_COLOR", help="Disable colored output")
@click.option(
    "--no-root-check",
    default=False,
    is_flag=True,
    envvar="MFETCH_NO_ROOT_CHECK",
    help="Run without root privileges; DMI details will be unavailable",
)
@click.option("-d", "--debug", default=False, is_flag=True, help="Enable debug logging")
def main(
    bar_width: int,
    meminfo_path: str,
    as_json: bool,
    no_color: bool,
    no_root_check: bool,
    debug: bool,
):
    logger = log.configure(
        debug=debug,
        name="mfetch",
        logfile=system.get_cache_directory() / "mfetch.log",
    )
    logger.info("entering")

    if not no_root_check and not system.is_root():
        logger.error("not running as root")
        click.echo(
            render.style("This script requires root privileges.", not no_color, fg="red"),
            err=True,
        )
        sys.exit(1)

    dmidecode_available = system.dmidecode_available()
    if dmidecode_available:
        module_text = system.read_dmi_table(DMI_TYPE_MEMORY_DEVICE)
        array_text = system.read_dmi_table(DMI_TYPE_MEMORY_ARRAY)
    else:
        logger.warning("dmidecode not found in PATH")
        module_text = array_text = ""

    dmi_info = dmi.get_dmi_info(module_text, array_text)
    usage_info = meminfo.get_memory_usage(system.read_meminfo(meminfo_path))
    logger.debug(
        f"dmi success={dmi_info.success} modules={len(dmi_info.modules)} usage success={usage_info.success}"
    )

    if as_json:
        click.echo(json.dumps({"dmi": asdict(dmi_info), "usage": asdict(usage_info)}, indent=4))
    else:
        click.echo(
            render.render_report(
                dmi_info,
                usage_info,
                dmidecode_available=dmidecode_available,
                width=bar_width,
                color=not no_color,
            )
        )


if __name__ == "__main__":
    main()
