# src/skillstake_pow/scripts/pow_cli.py
"""Command line access to the SkillStake proof-of-work puzzle.

Examples:
    skillstake-pow new-task
    skillstake-pow solve --wallet <base58> --task-id 1700000000 --difficulty 16
    skillstake-pow verify --keypair ~/.config/solana/id.json --task-id 1700000000 --nonce 4821
"""
from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from concurrent.futures import TimeoutError as FutureTimeoutError

from skillstake_pow.core.errors import InvalidInputError, PreconditionFailedError
from skillstake_pow.core.proof_record import new_task_id
from skillstake_pow.services.pow_service import PowService
from skillstake_pow.services.solver import SolveProgress, SolveResult
from skillstake_pow.utils.keys import load_keypair_file

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

logger = logging.getLogger("skillstake_pow.cli")


def say(msg: str) -> None:
    print(msg, flush=True)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="skillstake-pow", description="Solve and verify SkillStake proofs of work."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("new-task", help="Print a fresh task id (current Unix time)")

    for name, help_text in (("solve", "Search for a nonce"), ("verify", "Check a nonce")):
        cmd = sub.add_parser(name, help=help_text)
        identity = cmd.add_mutually_exclusive_group()
        identity.add_argument("--wallet", help="Wallet public key (base58 or hex)")
        identity.add_argument("--keypair", help="Path to a Solana CLI keypair JSON file")
        cmd.add_argument("--mint", help="Token mint public key (defaults to configuration)")
        cmd.add_argument("--difficulty", type=int, help="Required leading zero bits")
        cmd.add_argument("--task-id", required=True, help="Decimal task identifier")
        if name == "solve":
            cmd.add_argument("--start-nonce", default=None, help="Nonce to start searching from")
        else:
            cmd.add_argument("--nonce", required=True, help="Decimal nonce to verify")

    return parser.parse_args(argv)


def _resolve_wallet(args: argparse.Namespace) -> bytes | str | None:
    if args.keypair:
        return load_keypair_file(args.keypair)
    return args.wallet


def _report_progress(progress: SolveProgress) -> None:
    logger.debug(
        "Searched %d nonces (next %d) in %.1fs",
        progress.iterations,
        progress.nonce,
        progress.elapsed_seconds,
    )


def run_solve(service: PowService, args: argparse.Namespace) -> int:
    job = service.start_solve(args.task_id, args.start_nonce, on_progress=_report_progress)
    try:
        # Poll so KeyboardInterrupt is delivered to the main thread promptly
        while True:
            try:
                outcome = job.result(timeout=0.25)
                break
            except FutureTimeoutError:
                continue
    except KeyboardInterrupt:
        job.cancel()
        outcome = job.result()
        say(f"Proof search cancelled after {outcome.iterations} iterations.")
        return EXIT_INTERRUPTED

    if not isinstance(outcome, SolveResult):
        say(f"Proof search cancelled after {outcome.iterations} iterations.")
        return EXIT_INTERRUPTED

    say(f"nonce:      {outcome.nonce}")
    say(f"hash:       {outcome.digest_hex}")
    say(f"iterations: {outcome.iterations}")
    say(f"duration:   {outcome.duration_ms:.0f} ms")

    # The solver's answer is only a hint until verified
    check = service.verify(args.task_id, str(outcome.nonce))
    return EXIT_OK if check.valid else EXIT_FAILED


def run_verify(service: PowService, args: argparse.Namespace) -> int:
    result = service.verify(args.task_id, args.nonce)
    say(f"valid: {'yes' if result.valid else 'no'}")
    if result.digest_hex is not None:
        say(f"hash:  {result.digest_hex}")
    return EXIT_OK if result.valid else EXIT_FAILED


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "new-task":
        say(str(new_task_id()))
        return EXIT_OK

    try:
        service = PowService(
            wallet=_resolve_wallet(args), difficulty=args.difficulty, mint=args.mint
        )
        if not service.connected:
            raise PreconditionFailedError("No wallet identity available.")
        if args.command == "solve":
            return run_solve(service, args)
        return run_verify(service, args)
    except PreconditionFailedError as exc:
        say(f"error: {exc} Pass --wallet or --keypair.")
        return EXIT_USAGE
    except InvalidInputError as exc:
        say(f"error: {exc}")
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
