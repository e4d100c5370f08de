# ABOUTME: Fail-closed validation gate for assembled forecast records.
# ABOUTME: Converts pydantic validation failures into SchemaError naming the first violation.

from pydantic import ValidationError

from kirmada.errors import SchemaError
from kirmada.models import NormalizedForecast


def validate_forecast(record: dict) -> NormalizedForecast:
    """Validate a camelCase forecast record and return the typed model.

    No coercion is applied: numbers must be numbers, timestamps must be strings,
    and ``condition`` must be one of the known labels. Unknown keys are rejected.
    """
    try:
        return NormalizedForecast.model_validate(record)
    except ValidationError as e:
        errors = e.errors(include_url=False)
        first = errors[0]
        location = ".".join(str(part) for part in first["loc"])
        raise SchemaError(location, first["msg"], errors) from e
