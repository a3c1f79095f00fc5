"""This module contains various error messages."""

# The canonical document delimiter, emitted ahead of every re-serialized document.
DELIMITER = "---\n"
ENCODING = "utf-8"

# errors:
READ_ERROR = "unable to read: {error}"
DECODE_ERROR = "unable to decode document {index}: {error}"
NOT_A_MAPPING = "unable to decode document {index}: expected a mapping at the document root, got {kind}"
FIELD_DECODE_ERROR = "unable to decode field '{path}': {error}"
EXPECTED_POINTER = "expected pointer for destination"
INDEX_OUT_OF_RANGE = "{index} is not a valid index for the YAML stream. Max index is {max_index}"
REENCODE_ERROR = "unable to re-encode document {index}, this is a bug: {error}"

# settings
YAMLSTREAM_STRICT = "YAMLSTREAM_STRICT"
