"""Command line front end for the SIMON block primitive.

Usage:
    python scripts/simon_cli.py encrypt --key 0001020308090a0b10111213 636c696e6720726f
    python scripts/simon_cli.py decrypt --key 0001020308090a0b10111213 c88f1a117fe2a25c
    python scripts/simon_cli.py kat
    python scripts/simon_cli.py evaluate --variants SIMON64_96 --vectors 200 --output runs/eval.json

Texts and keys are hex strings, least significant byte first. The variant is
detected from their lengths unless --variant is given.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Ensure project root is on path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from simonlab.config import load_settings
from simonlab.cipher.builder import MODE_DEC, MODE_ENC, build_cipher, run_simon
from simonlab.cipher.errors import SimonError
from simonlab.cipher.variants import get_variant, list_variants
from simonlab.evaluation import (
    EvaluationReport,
    check_known_answers,
    compute_sac,
    run_roundtrip_tests,
)
from simonlab.utils.repro import set_global_seed, utc_timestamp, write_json

logger = logging.getLogger("simon_cli")


def _hex(value: str) -> bytes:
    try:
        return bytes.fromhex(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a hex string: {value!r}") from None


def _cli_progress(message: str, current: int, total: int) -> None:
    """Print progress to stderr."""
    pct = (current / total * 100) if total > 0 else 0
    print(f"  [{current + 1}/{total}] ({pct:.0f}%) {message}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    settings = load_settings()
    parser = argparse.ArgumentParser(
        description="SIMON block cipher: single-block encrypt/decrypt and self checks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    for name in ("encrypt", "decrypt"):
        p = sub.add_parser(name, help=f"{name.capitalize()} one block")
        p.add_argument("text", type=_hex, help="Block as hex")
        p.add_argument("--key", type=_hex, required=True, help="Key as hex")
        p.add_argument(
            "--variant", default=None,
            help="Force a variant (e.g. SIMON128_192) instead of detecting it",
        )

    sub.add_parser("kat", help="Check the published known-answer vectors")

    p = sub.add_parser("evaluate", help="Known-answer, roundtrip and SAC evaluation")
    p.add_argument(
        "--variants", nargs="+", default=None,
        help="Variant names to evaluate (default: all five)",
    )
    p.add_argument(
        "--vectors", type=int, default=settings.roundtrip_vectors,
        help=f"Roundtrip vectors per variant (default: {settings.roundtrip_vectors})",
    )
    p.add_argument(
        "--sac-trials", type=int, default=settings.sac_trials,
        help=f"SAC trials per input bit (default: {settings.sac_trials})",
    )
    p.add_argument(
        "--skip-sac", action="store_true",
        help="Skip SAC analysis",
    )
    p.add_argument(
        "--seed", type=int, default=settings.global_seed,
        help=f"Random seed (default: {settings.global_seed})",
    )
    p.add_argument(
        "--output", type=str, default=None,
        help="Write the JSON report here (default: <runs_dir>/<timestamp>_evaluation.json)",
    )
    return parser


def _transform(args: argparse.Namespace, mode: int) -> int:
    cipher = build_cipher(args.variant) if args.variant else None
    out = run_simon(mode, args.text, args.key, cipher=cipher)
    print(out.hex())
    return 0


def _kat() -> int:
    results = check_known_answers()
    for r in results:
        print(r.summary())
    return 0 if all(r.passed for r in results) else 1


def _evaluate(args: argparse.Namespace) -> int:
    settings = load_settings()
    set_global_seed(args.seed)
    specs = [get_variant(v) for v in args.variants] if args.variants else list_variants()

    report = EvaluationReport(kat_results=check_known_answers(specs))
    for idx, spec in enumerate(specs):
        _cli_progress(f"roundtrip {spec.name}", idx, len(specs))
        report.roundtrip_results.append(
            run_roundtrip_tests(spec, num_vectors=args.vectors, seed=args.seed)
        )

    if not args.skip_sac:
        for idx, spec in enumerate(specs):
            _cli_progress(f"SAC {spec.name}", idx, len(specs))
            cipher = build_cipher(spec)
            for input_type in ("plaintext", "key"):
                report.sac_results.append(
                    compute_sac(cipher, input_type=input_type, trials=args.sac_trials, seed=args.seed)
                )

    print(report.to_summary())

    out_path = Path(args.output) if args.output else (
        Path(settings.project_root) / settings.runs_dir / f"{utc_timestamp()}_evaluation.json"
    )
    write_json(out_path, report.to_dict())
    logger.info("Report written to %s", out_path)

    return 0 if not report.failing_variants() else 1


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else load_settings().log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        if args.command == "encrypt":
            return _transform(args, MODE_ENC)
        if args.command == "decrypt":
            return _transform(args, MODE_DEC)
        if args.command == "kat":
            return _kat()
        return _evaluate(args)
    except SimonError as exc:
        logger.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
