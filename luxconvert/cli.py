from __future__ import annotations

import argparse
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional

from luxconvert.converter.manager import ConversionManager
from luxconvert.core.hashing import stable_json_dumps
from luxconvert.errors import PhotometricError


def _read_input(path_arg: str) -> Optional[bytes]:
    path = Path(path_arg).expanduser().resolve()
    if not path.exists():
        print(f"[ERROR] File not found: {path}")
        print("        Provide a valid path to an .ies, .ldt or .cie file.")
        return None
    if not path.is_file():
        print(f"[ERROR] Not a file: {path}")
        return None
    return path.read_bytes()


def _parse_overrides(pairs: List[str]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"expected key=value, got {pair!r}")
        out[key.strip()] = value.strip()
    return out


def _source_format(mgr: ConversionManager, data: bytes, explicit: Optional[str]) -> str:
    if explicit:
        return explicit.lower()
    return mgr.detect_format(data).format


def _cmd_detect(args: argparse.Namespace) -> int:
    data = _read_input(args.file)
    if data is None:
        return 2
    try:
        res = ConversionManager().detect_format(data)
    except PhotometricError as e:
        print(f"[ERROR] {e}")
        return 3
    print(f"Format: {res.format} (confidence {res.confidence:.2f}, version {res.version or 'unknown'})")
    for alt in res.alternatives:
        print(f"  Alternative: {alt.format} ({alt.confidence:.2f})")
    return 0


def _cmd_convert(args: argparse.Namespace) -> int:
    data = _read_input(args.file)
    if data is None:
        return 2
    try:
        overrides = _parse_overrides(args.set)
    except ValueError as e:
        print(f"[ERROR] {e}")
        return 2

    mgr = ConversionManager()
    try:
        src = _source_format(mgr, data, args.source)
        target = mgr.registry.codec(args.to)
        changes = {}
        if args.precision is not None:
            changes["precision"] = args.precision
        if args.dot_decimal:
            changes["use_comma_decimal"] = False
        options = target.default_options().merged(**changes)
        res = mgr.convert(data, src, args.to, options=options, overrides=overrides)
    except PhotometricError as e:
        print(f"[ERROR] {e}")
        return 3

    in_path = Path(args.file).expanduser().resolve()
    ext = mgr.format_info(args.to).extensions[0]
    outpath = Path(args.out).expanduser().resolve() if args.out else in_path.with_suffix(ext)
    outpath.parent.mkdir(parents=True, exist_ok=True)
    outpath.write_bytes(res.output)

    print(f"Converted {src} -> {args.to.lower()}")
    print(f"  Saved: {outpath}")
    print(f"  Time: {res.processing_time_ms:.1f} ms")
    for w in res.warnings:
        print(f"  [WARN] {w}")
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    data = _read_input(args.file)
    if data is None:
        return 2
    mgr = ConversionManager()
    try:
        fmt = _source_format(mgr, data, args.format)
        record = mgr.parse(data, fmt)
    except PhotometricError as e:
        print(f"[ERROR] {e}")
        return 3
    res = mgr.validate_data(record)

    if args.json:
        print(stable_json_dumps({"format": fmt, **asdict(res), "summary": res.summary}, indent=2))
        return 0 if res.is_valid else 3

    print(f"Validation ({fmt}): {'valid' if res.is_valid else 'INVALID'}, score {res.score:.2f}")
    for f in res.findings:
        print(f"  [{f.severity}] {f.id}: {f.message}")
    s = res.summary
    print(f"  Findings: {s['errors']} error(s), {s['warnings']} warning(s), {s['info']} info")
    return 0 if res.is_valid else 3


def _cmd_info(args: argparse.Namespace) -> int:
    try:
        info = ConversionManager().format_info(args.format)
    except PhotometricError as e:
        print(f"[ERROR] {e}")
        return 2
    if args.json:
        print(stable_json_dumps(info, indent=2))
        return 0
    caps = info.capabilities
    print(f"{info.name} ({info.id})")
    print(f"  {info.description}")
    print(f"  Versions: {', '.join(info.supported_versions)}")
    print(f"  Extensions: {', '.join(info.extensions)}")
    print(f"  Standards: {', '.join(info.standards)}")
    print(f"  Photometry types: {', '.join(caps.photometry_types)}")
    print(f"  Max grid: {caps.max_vertical_angles} x {caps.max_horizontal_angles}")
    return 0


def _cmd_formats(args: argparse.Namespace) -> int:
    mgr = ConversionManager()
    for fid in mgr.supported_formats():
        print(f"{fid}\t{mgr.format_info(fid).name}")
    return 0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="luxconvert")
    p.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    sub = p.add_subparsers(dest="cmd", required=True)

    d = sub.add_parser("detect", help="Detect the photometric format of a file.")
    d.add_argument("file", help="Path to photometric file")
    d.set_defaults(func=_cmd_detect)

    c = sub.add_parser("convert", help="Convert a photometric file to another format.")
    c.add_argument("file", help="Path to photometric file")
    c.add_argument("--to", required=True, help="Target format: ies|ldt|cie")
    c.add_argument("--from", dest="source", default=None, help="Source format (default: detect)")
    c.add_argument("--out", default=None, help="Output path (default: input path with the target extension)")
    c.add_argument("--precision", type=int, default=None, help="Decimal places for numeric output")
    c.add_argument("--dot-decimal", action="store_true", help="Use '.' as decimal separator in LDT output")
    c.add_argument("--set", action="append", default=[], help="Metadata override (repeatable): field=value")
    c.set_defaults(func=_cmd_convert)

    v = sub.add_parser("validate", help="Run the quality checks on a photometric file.")
    v.add_argument("file", help="Path to photometric file")
    v.add_argument("--format", default=None, help="Override format (default: detect)")
    v.add_argument("--json", action="store_true", help="Print machine-readable JSON")
    v.set_defaults(func=_cmd_validate)

    i = sub.add_parser("info", help="Describe a supported format.")
    i.add_argument("format", help="Format id: ies|ldt|cie")
    i.add_argument("--json", action="store_true", help="Print machine-readable JSON")
    i.set_defaults(func=_cmd_info)

    f = sub.add_parser("formats", help="List supported formats.")
    f.set_defaults(func=_cmd_formats)

    args = p.parse_args(argv)
    logging.basicConfig(level=getattr(logging, str(args.log_level).upper(), logging.WARNING))
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
