# main.py
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Sequence

from charset import debug as charset_debug
from charset_encoder import CharsetEncoder, debug as encoder_debug
from debug import Debug
from errors import CharsetEncoderError
from permutation import STRATEGIES, build_rng, debug as permutation_debug
from suites import SUITES, resolve_charset

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────

DEFAULT_CHARSET = SUITES[1]["alphabet"]


@dataclass(slots=True)
class Config:
    """Everything needed to rebuild an encoder."""

    charset: str
    mapping: str | None = None
    strategy: str = "rejection"   # used only when mapping is None
    seed: int | None = None       # ditto; None → CSPRNG


def load_config(path: str | Path) -> Config:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError("Config must be a JSON object")
    required = {"charset"}
    missing = required - data.keys()
    if missing:
        raise ValueError(f"Missing keys in config: {', '.join(sorted(missing))}")
    known = {k: data[k] for k in ("charset", "mapping", "strategy", "seed") if k in data}
    for key in ("charset", "mapping", "strategy"):
        if known.get(key) is not None and not isinstance(known[key], str):
            raise ValueError(f"Config key {key!r} must be a string")
    if known.get("seed") is not None and not isinstance(known["seed"], int):
        raise ValueError("Config key 'seed' must be an integer")
    return Config(**known)


def save_config(cfg: Config, path: str | Path) -> None:
    payload = {k: v for k, v in asdict(cfg).items() if v is not None}
    Path(path).write_text(json.dumps(payload, indent=2), encoding="utf-8")


def build_encoder(cfg: Config) -> CharsetEncoder:
    return CharsetEncoder(
        cfg.charset,
        cfg.mapping,
        rng=build_rng(cfg.seed),
        strategy=cfg.strategy,
    )


def enable_debug(log_to: str | None = None) -> None:
    """Turn on every component logger in the encoder modules."""
    if log_to:
        Debug(log_to=log_to)
    for dbg in (charset_debug, permutation_debug, encoder_debug):
        dbg.toggle_global(True)
        dbg.enable_all()


# ────────────────────────────────────────────────────────────────────────
#  1. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Substitution cipher over a custom charset.")
    p.add_argument("--debug", action="store_true", help="Log every encoder component at DEBUG level.")
    p.add_argument("--log-file", metavar="FILE", help="Also write debug output to FILE.")
    sub = p.add_subparsers(dest="command", required=True)

    def add_source(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--charset",
            help="Suite name/number (" + ", ".join(s["name"] for s in SUITES.values())
            + ") or a literal string of symbols (default lower)",
        )
        sp.add_argument("--mapping", help="Mapping string key:value,... (random if omitted)")
        sp.add_argument("--config", metavar="FILE", type=Path, help="Load charset & mapping from JSON.")

    gen = sub.add_parser("generate", help="Print or save a fresh random mapping.")
    gen.add_argument("--charset", help="Suite name/number or literal symbols (default lower)")
    gen.add_argument(
        "--seed",
        type=int,
        help="Integer seed for deterministic output "
        "(omit for cryptographically strong randomness)",
    )
    gen.add_argument("--strategy", choices=STRATEGIES, default="rejection", help="Generator (default rejection)")
    gen.add_argument("--outfile", type=Path, help="Write JSON settings here (stdout mapping if omitted)")

    for name in ("encode", "decode"):
        sp = sub.add_parser(name, help=f"{name.capitalize()} a message.")
        sp.add_argument("message", nargs="?", help="Text to process. If omitted, read lines until a blank one.")
        add_source(sp)

    val = sub.add_parser("validate", help="Check a mapping against a charset.")
    add_source(val)

    return p.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> Config:
    if getattr(args, "config", None):
        cfg = load_config(args.config)
        if args.charset:
            cfg.charset = resolve_charset(args.charset)
        if args.mapping:
            cfg.mapping = args.mapping
        return cfg
    charset = resolve_charset(args.charset) if args.charset else DEFAULT_CHARSET
    return Config(
        charset=charset,
        mapping=getattr(args, "mapping", None),
        strategy=getattr(args, "strategy", "rejection"),
        seed=getattr(args, "seed", None),
    )


# ────────────────────────────────────────────────────────────────────────
#  2. Sub-commands
# ────────────────────────────────────────────────────────────────────────


def cmd_generate(args: argparse.Namespace) -> None:
    cfg = config_from_args(args)
    encoder = build_encoder(cfg)
    mapping = encoder.export_mapping()
    if args.outfile:
        save_config(Config(charset=cfg.charset, mapping=mapping), args.outfile)
        print(f"Wrote {args.outfile} ({len(encoder.charset)} symbols)")
    else:
        print(mapping)


def cmd_translate(args: argparse.Namespace) -> None:
    cfg = config_from_args(args)
    if not cfg.mapping:
        raise SystemExit("A --mapping or --config is required to encode/decode.")
    encoder = build_encoder(cfg)
    op = encoder.encode if args.command == "encode" else encoder.decode

    if args.message is not None:
        print(op(args.message))
        return

    while True:
        try:
            line = input()
        except EOFError:
            break
        if not line:
            break
        print(op(line))


def cmd_validate(args: argparse.Namespace) -> None:
    cfg = config_from_args(args)
    if not cfg.mapping:
        raise SystemExit("Nothing to validate: no mapping given.")
    build_encoder(cfg)
    print("OK")


COMMANDS = {
    "generate": cmd_generate,
    "encode": cmd_translate,
    "decode": cmd_translate,
    "validate": cmd_validate,
}


# ────────────────────────────────────────────────────────────────────────
#  3. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    if args.debug or args.log_file:
        enable_debug(args.log_file)

    try:
        COMMANDS[args.command](args)
    except CharsetEncoderError as e:
        sys.exit(f"Invalid settings: {e}")
    except (OSError, ValueError) as e:
        sys.exit(f"Failed to load configuration: {e}")


if __name__ == "__main__":
    main()
