from luxconvert.validation.defaults import default_validator
from luxconvert.validation.engine import Validator
from luxconvert.validation.formats import CIEValidator, FormatValidator, IESValidator, LDTValidator

__all__ = ["default_validator", "Validator", "FormatValidator", "IESValidator", "LDTValidator", "CIEValidator"]
