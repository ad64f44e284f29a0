"""Shared constants for gitfront."""

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1

# Ref namespaces
REFS_PREFIX = "refs/"
BRANCH_PREFIX = "refs/heads/"
