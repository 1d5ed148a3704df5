"""Constants and default values"""

BSWITCHER_VERSION = "1.0.0"

# Default configuration, also the command-line defaults
DEFAULT_CONFIG = {
    'format_string': "$line_number - $xtitle",
    'sort_order': "focus-history",
    'reverse': False,
    'dmenu_args': "-p 'Switch to: ' -l 30 -b -i",
    'pipe': None,
    'wnck': False,
}

# External programs
SHELL = "bash"
REQUIRED_PROGRAMS = ["bspc", "dmenu", SHELL]
XTITLE_PROGRAM = "xtitle"

# Template variables exposed to the format string
LINE_NUMBER_VAR = "line_number"
TITLE_VAR = "xtitle"
COUNT_VAR = "number_of_nodes"

# Single quotes would end the quoted shell assignment of a title
QUOTE_SUBSTITUTE = "’"
