separator                           = "  │  "
tab_divider                         = "│"
in_use_marker                       = "● "
password_mask                       = "●"
cursor_block                        = "█"
ellipsis                            = "…"

spinner                             = ["◐", "◓", "◑", "◒"]

signal_bars_4                       = "▂▄▆█"
signal_bars_3                       = "▂▄▆ "
signal_bars_2                       = "▂▄  "
signal_bars_1                       = "▂   "
signal_bars_0                       = "    "
