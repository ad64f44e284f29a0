"""
Schema validation for gitfront settings.

Schemas live in gitfront/schemas/<name>.schema.json. Every problem in the
data is reported at once, sorted by location, so a settings file can be
fixed in one pass.
"""

import json
from pathlib import Path

import jsonschema

from gitfront.lib.errors import GitfrontError

SCHEMAS_DIR = Path(__file__).parent.parent / "schemas"

# Cache loaded validators
_validator_cache: dict[str, jsonschema.protocols.Validator] = {}


class SchemaError(GitfrontError):
    """Data did not match a schema."""

    def __init__(self, schema_name: str, problems: list[str]):
        self.schema_name = schema_name
        self.problems = problems
        super().__init__(f"[{schema_name}] " + "; ".join(problems))


def _validator(schema_name: str) -> jsonschema.protocols.Validator:
    if schema_name not in _validator_cache:
        schema_path = SCHEMAS_DIR / f"{schema_name}.schema.json"
        if not schema_path.exists():
            raise SchemaError(schema_name, [f"schema file not found: {schema_path}"])
        schema = json.loads(schema_path.read_text())
        cls = jsonschema.validators.validator_for(schema)
        cls.check_schema(schema)
        _validator_cache[schema_name] = cls(schema)
    return _validator_cache[schema_name]


def _location(error: jsonschema.ValidationError) -> str:
    return ".".join(str(p) for p in error.absolute_path) or "(root)"


def validate(data, schema_name: str) -> None:
    """
    Validate data against the named schema.

    Raises:
        SchemaError: listing each problem as "<location>: <message>"
    """
    errors = sorted(_validator(schema_name).iter_errors(data), key=lambda e: list(map(str, e.absolute_path)))
    if errors:
        raise SchemaError(schema_name, [f"{_location(e)}: {e.message}" for e in errors])
