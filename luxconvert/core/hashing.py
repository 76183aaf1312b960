from __future__ import annotations

import json
import math
import hashlib
from dataclasses import is_dataclass, asdict
from enum import Enum
from typing import Any


def sha256_bytes(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _normalize(obj: Any) -> Any:
    if is_dataclass(obj) and not isinstance(obj, type):
        return _normalize(asdict(obj))
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, dict):
        return {str(k): _normalize(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_normalize(v) for v in obj]
    if isinstance(obj, float):
        if math.isnan(obj) or math.isinf(obj):
            raise ValueError("NaN/Inf not allowed in stable JSON")
        return float(f"{obj:.12g}")
    return obj


def stable_json_dumps(obj: Any, indent: int | None = None) -> str:
    normalized = _normalize(obj)
    if indent is not None:
        return json.dumps(normalized, sort_keys=True, indent=indent, ensure_ascii=False)
    return json.dumps(normalized, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def record_fingerprint(record: Any) -> str:
    """Content hash of a photometric record, independent of the file it came from."""
    return sha256_bytes(stable_json_dumps(record).encode("utf-8"))
