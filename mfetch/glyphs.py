# Report icons
header          = "\U0001F4E6"  # package
memory_info     = "\U0001F4D6"  # open book
memory_modules  = "\U0001F4D7"  # green book
module_slot     = "\U0001F9E0"  # brain
module_bank     = "\U0001F4CD"  # pin
module_size     = "\U0001F4E6"  # package
manufacturer    = "\U0001F3ED"  # factory
part_number     = "\U0001F3F7\uFE0F"  # label
serial_number   = "\U0001F522"  # numbers
form_factor     = "\U0001F4D0"  # triangular ruler
module_type     = "\U0001F9E9"  # puzzle piece
module_speed    = "\u26A1"  # high voltage
voltage         = "\U0001F50C"  # plug

# Usage bars
bar_filled = "#"
bar_empty  = "-"
