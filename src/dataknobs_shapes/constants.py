"""Issue codes and default issue messages.

Default messages are ``str.format`` templates receiving ``param``.
"""

CODE_TYPE = "type"
CODE_TUPLE = "tuple"
CODE_UNION = "union"
CODE_CONST = "const"
CODE_ENUM = "enum"
CODE_NEVER = "never"
CODE_PREDICATE = "predicate"

CODE_ARRAY_MIN = "array_min_length"
CODE_ARRAY_MAX = "array_max_length"
CODE_SET_MIN = "set_min_size"
CODE_SET_MAX = "set_max_size"

CODE_NUMBER_GT = "number_gt"
CODE_NUMBER_GTE = "number_gte"
CODE_NUMBER_LT = "number_lt"
CODE_NUMBER_LTE = "number_lte"
CODE_NUMBER_MULTIPLE_OF = "number_multiple_of"
CODE_NUMBER_FINITE = "number_finite"
CODE_NUMBER_INTEGER = "number_integer"

CODE_INTEGER_MIN = "integer_min"
CODE_INTEGER_MAX = "integer_max"

CODE_DATE_MIN = "date_min"
CODE_DATE_MAX = "date_max"

CODE_STRING_MIN = "string_min_length"
CODE_STRING_MAX = "string_max_length"
CODE_STRING_REGEX = "string_regex"

MESSAGE_ARRAY_TYPE = "Must be an array"
MESSAGE_TUPLE = "Must be a tuple of length {param}"
MESSAGE_SET_TYPE = "Must be a set"
MESSAGE_OBJECT_TYPE = "Must be an object"
MESSAGE_NUMBER_TYPE = "Must be a number"
MESSAGE_INTEGER_TYPE = "Must be an integer"
MESSAGE_DATE_TYPE = "Must be a date"
MESSAGE_STRING_TYPE = "Must be a string"
MESSAGE_BOOLEAN_TYPE = "Must be a boolean"
MESSAGE_AWAITABLE_TYPE = "Must be awaitable"
MESSAGE_UNION = "Must conform the union"
MESSAGE_CONST = "Must be equal to {param!r}"
MESSAGE_ENUM = "Must be equal to one of {param!r}"
MESSAGE_NEVER = "Must not be used"
MESSAGE_PREDICATE = "Must conform the predicate"

MESSAGE_ARRAY_MIN = "Must have the minimum length of {param}"
MESSAGE_ARRAY_MAX = "Must have the maximum length of {param}"
MESSAGE_SET_MIN = "Must have the minimum size of {param}"
MESSAGE_SET_MAX = "Must have the maximum size of {param}"

MESSAGE_NUMBER_GT = "Must be greater than {param}"
MESSAGE_NUMBER_GTE = "Must be greater than or equal to {param}"
MESSAGE_NUMBER_LT = "Must be less than {param}"
MESSAGE_NUMBER_LTE = "Must be less than or equal to {param}"
MESSAGE_NUMBER_MULTIPLE_OF = "Must be a multiple of {param}"
MESSAGE_NUMBER_FINITE = "Must be a finite number"
MESSAGE_NUMBER_INTEGER = "Must be an integer"

MESSAGE_INTEGER_MIN = "Must be greater than or equal to {param}"
MESSAGE_INTEGER_MAX = "Must be less than or equal to {param}"

MESSAGE_DATE_MIN = "Must be after or equal to {param}"
MESSAGE_DATE_MAX = "Must be before or equal to {param}"

MESSAGE_STRING_MIN = "Must have the minimum length of {param}"
MESSAGE_STRING_MAX = "Must have the maximum length of {param}"
MESSAGE_STRING_REGEX = "Must match the pattern {param}"

# Largest integer a float carries without loss (2 ** 53 - 1)
MAX_SAFE_INTEGER = 9007199254740991
