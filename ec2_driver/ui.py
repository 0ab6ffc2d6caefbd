"""
ANSI codes used for console and log output
"""

RED = '\033[31m'
YELLOW = '\033[33m'
CYAN = '\033[36m'
DARK_BLUE = '\033[38;5;27m'
ORANGE_BROWN = '\033[38;5;130m'
RESET = '\033[0m'
