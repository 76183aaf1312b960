from luxconvert.core.hashing import sha256_bytes, stable_json_dumps
from luxconvert.core.numbers import format_number, parse_float
from luxconvert.core.units import FT_TO_M, from_meters, to_meters

__all__ = ["sha256_bytes", "stable_json_dumps", "format_number", "parse_float", "FT_TO_M", "from_meters", "to_meters"]
