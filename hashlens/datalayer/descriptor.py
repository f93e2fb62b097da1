import secrets
import numbers
from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from hashlens.common.constants import RANDOM_VALUE_SIZE
from hashlens.common.errors import InvalidDescriptorError, InvalidParameterError
from hashlens.datalayer.hash_algorithm.similarity_family import SimilarityFamily

class AlgorithmFamily(str, Enum):
    STANDARD_DIGEST = "standard-digest"
    PASSWORD_KDF    = "password-kdf"
    MAC             = "mac"
    SIMILARITY      = "similarity"

class UIMode(str, Enum):
    STANDARD   = "standard"
    PASSWORD   = "password"
    SIMILARITY = "similarity"
    HMAC       = "hmac"
    HKDF       = "hkdf"

class ParameterKind(str, Enum):
    TEXT      = "text"
    NUMBER    = "number"
    MULTILINE = "multiline"

class CategoryContext(str, Enum):
    USE  = "use"    # grouped by what they are used for
    ALGO = "algo"   # grouped by algorithm family

@dataclass(frozen=True)
class CategoryDetails:
    description: str
    features: str
    context: CategoryContext

@dataclass(frozen=True)
class ParameterSpec:
    id: str
    label: str
    kind: ParameterKind = ParameterKind.TEXT
    required: bool = False
    default: Any = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    placeholder: Optional[str] = None
    generate_random: bool = False

    def _coerce_number(self, value):
        if isinstance(value, bool):
            raise InvalidParameterError(f"Parameter \"{self.id}\" must be a number (got {value!r})")
        if isinstance(value, numbers.Real):
            number = value
        else:
            try:
                number = float(str(value).strip())
            except ValueError:
                raise InvalidParameterError(f"Parameter \"{self.id}\" must be a number (got {value!r})")
        if number != number:  # NaN
            raise InvalidParameterError(f"Parameter \"{self.id}\" must be a number (got {value!r})")
        if float(number).is_integer():
            number = int(number)

        if self.minimum is not None and number < self.minimum:
            raise InvalidParameterError(f"Parameter \"{self.id}\" must be >= {self.minimum} (got {number})")
        if self.maximum is not None and number > self.maximum:
            raise InvalidParameterError(f"Parameter \"{self.id}\" must be <= {self.maximum} (got {number})")
        return number

    def validate(self, value=None):
        """Returns the cleaned value for this parameter.
        Empty values fall back to the default; a required parameter without
        value nor default raises InvalidParameterError.

        Arguments:
        value   -- user-entered value (str, number or None)
        """
        if value is None or (isinstance(value, str) and value.strip() == ""):
            if self.default is None:
                if self.required:
                    raise InvalidParameterError(f"Parameter \"{self.id}\" is required")
                return None
            value = self.default

        if self.kind == ParameterKind.NUMBER:
            return self._coerce_number(value)
        return str(value)

    def generate(self):
        """Random hex value for parameters hinted as generate-random (salts)."""
        if self.generate_random:
            return secrets.token_hex(RANDOM_VALUE_SIZE)
        return self.default

    def as_dict(self):
        return {
            "id": self.id,
            "label": self.label,
            "kind": self.kind.value,
            "required": self.required,
            "default": self.default,
            "min": self.minimum,
            "max": self.maximum,
            "placeholder": self.placeholder,
            "generate_random": self.generate_random,
        }

@dataclass(frozen=True)
class AlgorithmDescriptor:
    id: str
    name: str
    description: str
    category: str
    family: AlgorithmFamily = AlgorithmFamily.STANDARD_DIGEST
    ui_mode: UIMode = UIMode.STANDARD
    output_length: Optional[int] = None   # bytes, advisory only
    parameters: Tuple[ParameterSpec, ...] = field(default_factory=tuple)
    supports_comparison: bool = False
    metric: Optional[SimilarityFamily] = None
    engine_name: Optional[str] = None
    engine_package: Optional[str] = None
    slow: bool = False
    legacy: bool = False

    def __post_init__(self):
        if not self.id:
            raise InvalidDescriptorError("Algorithm id cannot be empty")
        # lists coming from the catalog are frozen here
        object.__setattr__(self, "parameters", tuple(self.parameters))
        if self.supports_comparison and self.family != AlgorithmFamily.SIMILARITY:
            raise InvalidDescriptorError(f"\"{self.id}\" supports comparison but is not a similarity algorithm")
        if self.metric is not None and self.family != AlgorithmFamily.SIMILARITY:
            raise InvalidDescriptorError(f"\"{self.id}\" declares a metric but is not a similarity algorithm")
        ids = [param.id for param in self.parameters]
        if len(ids) != len(set(ids)):
            raise InvalidDescriptorError(f"\"{self.id}\" has duplicated parameter ids")

    def get_parameter(self, param_id):
        for param in self.parameters:
            if param.id == param_id:
                return param
        raise InvalidParameterError(f"\"{self.id}\" has no parameter \"{param_id}\"")

    def default_parameters(self) -> dict:
        return {param.id: param.default for param in self.parameters if param.default is not None}

    def validate_parameters(self, values=None) -> dict:
        """Validates user values against the parameter schema.
        Returns the cleaned values, dropping optional parameters left empty.

        Arguments:
        values  -- dict of parameter id to user-entered value
        """
        values = values or {}
        known = {param.id for param in self.parameters}
        unknown = sorted(set(values) - known)
        if unknown:
            raise InvalidParameterError(f"\"{self.id}\" does not accept parameters: {', '.join(unknown)}")

        cleaned = {}
        for param in self.parameters:
            value = param.validate(values.get(param.id))
            if value is not None:
                cleaned[param.id] = value
        return cleaned

    def as_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "family": self.family.value,
            "ui_mode": self.ui_mode.value,
            "output_length": self.output_length,
            "parameters": [param.as_dict() for param in self.parameters],
            "supports_comparison": self.supports_comparison,
            "metric": self.metric.value if self.metric else None,
            "slow": self.slow,
            "legacy": self.legacy,
        }
