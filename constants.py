"""
Constantes globales del front end e intérprete.
"""

# -----------------------
# Memoria
# -----------------------

# Number of cells in the runtime memory image
MEMORY_SIZE = 1000

# Valid formats when dumping memory cells
VALID_MEMORY_MODES = ["bin", "hex", "decimal"]

# Width used by the "bin" memory format
WORDS_SIZE_BITS = 64

# -----------------------
# Ejecución
# -----------------------

# Executed-instruction budget before a run is considered runaway
MAX_STEPS = 1_000_000

# Maximum tokens the parser may look ahead
MAX_LOOKAHEAD = 3

# -----------------------
# Archivos de salida
# -----------------------

MEMORY_SAVE_PATH_CSV = "memoria.csv"
MEMORY_SAVE_PATH = "memoria_modificada.xlsx"
