"""
bfvm configuration — constants and embedded program profiles.

The front end picks a program by name from EMBEDDED_PROGRAMS; nothing is
read from disk.
"""

# Value stored into a cell by ',' once the input channel is exhausted
EOF_VALUE = -1

# Cells are unbounded ints; only the low byte ever reaches the output
OUTPUT_MASK = 0xFF


# ──────────────────────────────────────────────
# Embedded programs
# ──────────────────────────────────────────────

HELLO_WORLD = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>"
    "+[<]<-]>>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)

# Echo input until end-of-stream. The +/- pair turns the -1 sentinel into 0.
CAT = ",+[-.,+]"

EMBEDDED_PROGRAMS = {
    "hello": {
        "source": HELLO_WORLD,
        "description": "Print 'Hello World!' followed by a newline",
    },
    "cat": {
        "source": CAT,
        "description": "Copy stdin to stdout until end-of-stream",
    },
}

DEFAULT_PROGRAM = "hello"


# ──────────────────────────────────────────────
# Logging defaults
# ──────────────────────────────────────────────

DEFAULT_LOGGER_NAME = "bfvm"

FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
FILE_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
