"""Generate the RSA private key used to encrypt session tokens."""

from __future__ import annotations

import argparse
import os
from pathlib import Path

from .security import KEY_BITS, generate_private_key, private_key_to_pem


def write_key(path: Path, bits: int = KEY_BITS) -> None:
    pem = private_key_to_pem(generate_private_key(bits))
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
    with os.fdopen(fd, "wb") as handle:
        handle.write(pem)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Write a new RSA private key for the hangman server")
    parser.add_argument("path", type=Path)
    parser.add_argument("--bits", type=int, default=KEY_BITS)
    args = parser.parse_args(argv)

    if args.path.exists():
        raise RuntimeError(f"{args.path} already exists, refusing to overwrite it")
    write_key(args.path, args.bits)


if __name__ == "__main__":
    main()
