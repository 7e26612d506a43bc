"""
Constants and configuration for cmd_lib
"""

# ============================================================================
# SEPARATORS
# ============================================================================
# Only recognized outside quoted spans. Everything else (&&, ||, >, <, &)
# is plain text and ends up inside an argument.
SEQUENCE_SEPARATOR = ';'   # Independent commands, run in order
PIPE_SEPARATOR = '|'       # Pipeline stages, stdout -> stdin

# Joins per-stage command text into the pipeline label used in logs/errors
PIPELINE_LABEL_JOINER = ' | '


# ============================================================================
# QUOTING
# ============================================================================
DOUBLE_QUOTE = '"'
SINGLE_QUOTE = "'"


# ============================================================================
# VARIABLE REFERENCES
# ============================================================================
# ${name} - resolved against the caller's symbol table
REFERENCE_OPEN = '${'
REFERENCE_CLOSE = '}'

# Hitting one of these before '}' means the reference was never closed
REFERENCE_TERMINATORS = {';', '\n'}


# ============================================================================
# OUTPUT DECODING
# ============================================================================
# Child output is bytes; invalid sequences are replaced, never raised
DEFAULT_ENCODING = 'utf-8'
DECODE_ERRORS = 'replace'
