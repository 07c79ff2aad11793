"""CLI config and defaults."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

TRACKER_HEADERS = ("sec", "usec", "x", "y", "z", "qw", "qx", "qy", "qz")
TIMESTAMP_HEADERS = ("sec", "usec")
OUTPUT_HEADERS = ("refx", "refy", "refz", "refqw", "refqx", "refqy", "refqz")
DEFAULT_OUTPUT = "outData.csv"
LOG_LEVELS = ("debug", "info", "warning", "error")


@dataclass(frozen=True)
class CsvFormat:
    """Static CSV layout shared by the reader, query source and writer."""

    delimiter: str = ","
    quote: str = '"'
    tracker_headers: tuple[str, ...] = TRACKER_HEADERS
    timestamp_headers: tuple[str, ...] = TIMESTAMP_HEADERS
    output_headers: tuple[str, ...] = OUTPUT_HEADERS

    @property
    def tracker_field_count(self) -> int:
        return len(self.tracker_headers)

    @property
    def timestamp_field_count(self) -> int:
        return len(self.timestamp_headers)


@dataclass(frozen=True)
class SynthConfig:
    tracker: str
    timestamps: str
    output: str = DEFAULT_OUTPUT
    log_level: str = "info"
    float_format: str = "%.6g"
    emit_missing_rows: bool = False


_CONFIG_FIELDS = {f.name for f in fields(SynthConfig)}
_BOOL_FIELDS = {"emit_missing_rows"}
_STRING_FIELDS = {"tracker", "timestamps", "output", "log_level", "float_format"}


def _parse_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        s = value.strip().lower()
        if s in {"true", "yes", "on"}:
            return True
        if s in {"false", "no", "off"}:
            return False
    raise ValueError(f"config key '{key}' expects a bool, got {value!r}")


def _coerce_config_value(key: str, value: Any) -> Any:
    if key in _BOOL_FIELDS:
        return _parse_bool(value, key)
    if key in _STRING_FIELDS:
        return "" if value is None else str(value)
    raise ValueError(f"unsupported config key '{key}'")


def _normalize_config_key(raw_key: Any) -> str:
    if not isinstance(raw_key, str):
        raise ValueError(f"config key must be string, got {type(raw_key).__name__}")
    key = raw_key.strip().replace("-", "_")
    if not key:
        raise ValueError("config key cannot be empty")
    return key


def _load_yaml_config(path: str) -> dict[str, Any]:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as exc:
        raise ValueError(f"failed to read --config file {p}: {exc}") from exc
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"failed to parse YAML config {p}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ValueError(f"--config root must be a mapping/object, got {type(loaded).__name__}")

    normalized: dict[str, Any] = {}
    for raw_key, raw_value in loaded.items():
        key = _normalize_config_key(raw_key)
        if key not in _CONFIG_FIELDS:
            raise ValueError(f"unknown config key in {p}: {raw_key!r}")
        normalized[key] = _coerce_config_value(key, raw_value)
    return normalized


def build_arg_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="motion-synthesizer",
        description=(
            "Interpolate tracker poses (sec,usec,x,y,z,qw,qx,qy,qz) at the "
            "timestamps of a second CSV file (sec,usec,...)."
        ),
    )
    ap.add_argument(
        "tracker",
        nargs="?",
        default=None,
        help="CSV file containing the tracker reports.",
    )
    ap.add_argument(
        "timestamps",
        nargs="?",
        default=None,
        help="CSV file with the timestamps to interpolate the tracker at.",
    )
    ap.add_argument(
        "--config",
        type=str,
        default="",
        help="YAML config file path. CLI args override YAML values.",
    )
    ap.add_argument(
        "--output",
        type=str,
        default=DEFAULT_OUTPUT,
        help="Output CSV path.",
    )
    ap.add_argument(
        "--log-level",
        choices=list(LOG_LEVELS),
        default="info",
        help="Global log level.",
    )
    ap.add_argument(
        "--float-format",
        type=str,
        default="%.6g",
        help="printf-style format for interpolated pose columns.",
    )
    ap.add_argument(
        "--emit-missing-rows",
        action="store_true",
        help=(
            "Write a row with empty pose columns for queries before the tracker "
            "data or after it runs out, instead of dropping them."
        ),
    )
    return ap


def validate_config(cfg: SynthConfig) -> None:
    if not str(cfg.tracker).strip():
        raise ValueError("tracker CSV path must be provided (CLI or --config)")
    if not str(cfg.timestamps).strip():
        raise ValueError("timestamp CSV path must be provided (CLI or --config)")
    if not str(cfg.output).strip():
        raise ValueError("--output must be non-empty")
    if cfg.log_level not in LOG_LEVELS:
        raise ValueError(
            f"--log-level must be one of {'|'.join(LOG_LEVELS)}, got {cfg.log_level}"
        )
    try:
        formatted = cfg.float_format % 1.5
    except (TypeError, ValueError) as exc:
        raise ValueError(
            f"--float-format must format a single float, got {cfg.float_format!r}"
        ) from exc
    if not formatted.strip():
        raise ValueError(f"--float-format produced empty output: {cfg.float_format!r}")


def parse_args(argv=None) -> SynthConfig:
    bootstrap = argparse.ArgumentParser(add_help=False)
    bootstrap.add_argument("--config", type=str, default="")
    bootstrap_ns, _ = bootstrap.parse_known_args(argv)

    yaml_cfg: dict[str, Any] = {}
    yaml_error: Optional[str] = None
    if bootstrap_ns.config:
        try:
            yaml_cfg = _load_yaml_config(bootstrap_ns.config)
        except ValueError as exc:
            yaml_error = str(exc)

    ap = build_arg_parser()
    if yaml_error is not None:
        ap.error(yaml_error)
    if yaml_cfg:
        ap.set_defaults(**yaml_cfg)
    args = ap.parse_args(argv)

    cfg = SynthConfig(
        tracker=str(args.tracker or ""),
        timestamps=str(args.timestamps or ""),
        output=args.output,
        log_level=args.log_level,
        float_format=args.float_format,
        emit_missing_rows=bool(args.emit_missing_rows),
    )
    try:
        validate_config(cfg)
    except ValueError as exc:
        ap.error(str(exc))
    return cfg
