#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import argparse
import copy
import json
import sys
from pathlib import Path
from typing import Optional

from hashsalt.hashing import (
    HashAlgorithm,
    HashConfigError,
    compute_hash,
    generate_random_salt,
    verify_hash,
)
from hashsalt.logger import setup_logger
from hashsalt.server import serve

# -------------------------------------------------
# Project root
# -------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config" / "settings.json"

DEFAULT_CONFIG = {
    "hash": {"default_algorithm": "SHA256"},
    "logging": {"file": None, "level": "WARNING", "json_format": False},
}


# -------------------------------------------------
# Config
# -------------------------------------------------
def load_config(config_path: Optional[Path] = None) -> dict:
    """
    Читает JSON-конфиг и накладывает его на значения по умолчанию.
    Отсутствие файла по умолчанию не ошибка; явно указанный файл обязан существовать.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH
        if not config_path.exists():
            return config
    elif not config_path.exists():
        raise FileNotFoundError(
            f"Config not found: {config_path}. "
            f"Copy from config/settings.example.json"
        )

    with config_path.open("r", encoding="utf-8") as f:
        user_config = json.load(f)

    if not isinstance(user_config, dict):
        raise ValueError(f"Config root must be a JSON object: {config_path}")

    for section, values in user_config.items():
        if section in DEFAULT_CONFIG:
            if not isinstance(values, dict):
                raise ValueError(
                    f"Config section '{section}' must be a JSON object, got {type(values).__name__}"
                )
            config[section].update(values)
        else:
            config[section] = values
    return config


# -------------------------------------------------
# CLI parser
# -------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hashsalt",
        description="Hash strings with MD5/SHA1/SHA256/SHA512, optionally salted",
    )
    parser.add_argument("--config", type=Path, help="Path to settings.json")
    parser.add_argument("--log-level", help="Override logging.level from config")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # -------- HASH --------
    hash_parser = subparsers.add_parser("hash", help="Hash one or more strings")
    hash_parser.add_argument(
        "strings",
        nargs="*",
        help="Strings to hash (read from stdin, one per line, if omitted)",
    )
    hash_parser.add_argument(
        "-a",
        "--algorithm",
        type=str.upper,
        choices=[a.value for a in HashAlgorithm],
        help="Digest algorithm (default from config)",
    )
    salt_group = hash_parser.add_mutually_exclusive_group(required=False)
    salt_group.add_argument("--salt", help="Append this salt to every string")
    salt_group.add_argument(
        "--random-salt",
        action="store_true",
        help="Append a fresh random salt to each string",
    )
    hash_parser.add_argument("--json", action="store_true", help="Print JSON lines")
    hash_parser.add_argument(
        "--expect",
        metavar="HEX",
        help="Compare the digest of a single string with HEX",
    )

    # -------- SALT --------
    salt_parser = subparsers.add_parser("salt", help="Generate random salts")
    salt_parser.add_argument("-n", "--count", type=int, default=1)

    # -------- SERVE --------
    subparsers.add_parser("serve", help="JSON-lines requests on stdin/stdout")

    return parser


def _read_stdin_strings() -> list:
    return [line.rstrip("\r\n") for line in sys.stdin]


# -------------------------------------------------
# Main
# -------------------------------------------------
def main(argv=None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    # ---- config ----
    try:
        config = load_config(args.config)
    except Exception as exc:  # noqa: BLE001
        print(f"FATAL: Cannot load config: {exc}", file=sys.stderr)
        sys.exit(1)

    if args.log_level:
        config["logging"]["level"] = args.log_level

    # ---- logging ----
    logger = setup_logger(config)

    # =================================================
    # HASH
    # =================================================
    if args.command == "hash":
        algorithm = args.algorithm or config["hash"]["default_algorithm"]
        try:
            strings = args.strings or _read_stdin_strings()
        except UnicodeDecodeError as exc:
            logger.error(f"stdin не является корректным UTF-8: {exc.reason}")
            sys.exit(2)

        if args.expect is not None:
            if len(strings) != 1:
                parser.error("--expect requires exactly one string")
            if args.random_salt:
                parser.error("--expect cannot be combined with --random-salt")
            try:
                ok = verify_hash(
                    strings[0], args.expect, algorithm, salt=args.salt, logger=logger
                )
            except ValueError as exc:
                logger.error(str(exc))
                sys.exit(2)
            print("OK" if ok else "MISMATCH")
            if not ok:
                sys.exit(1)
            return

        try:
            results = compute_hash(
                strings,
                algorithm,
                salt=args.salt,
                use_random_salt=args.random_salt,
                logger=logger,
            )
        except HashConfigError as exc:
            logger.error(str(exc))
            sys.exit(2)

        for r in results:
            if isinstance(r, str):
                print(json.dumps({"hash": r}) if args.json else r)
            elif args.json:
                print(r.model_dump_json())
            else:
                print(f"{r.id}\t{r.hash}\t{r.salt}\t{r.algorithm}")

    # =================================================
    # SALT
    # =================================================
    elif args.command == "salt":
        if args.count < 1:
            parser.error("--count must be positive")
        for _ in range(args.count):
            print(generate_random_salt())

    # =================================================
    # SERVE
    # =================================================
    elif args.command == "serve":
        handled = serve(logger=logger)
        logger.info(f"Обработано запросов: {handled}")


if __name__ == "__main__":
    main()
