"""The Command Line Interface for the utility, including Interactive elements.

A hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface) that asks for whatever was not given on
the command line, unless non-interactive mode is on. The demo walks one message through encryption, decryption and a
sign/verify cross-check.

Typical usage example:

    textbookrsa
    OR
    python -m textbookrsa demo --bits 512 --message "hello" -n
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import sys
import time
import typing

import textbookrsa
from textbookrsa import codec
from textbookrsa import entropy
from textbookrsa import keygen


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False
    minimum: int | None = None


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in Textbook RSA.",
            choices=["demo", "keygen"],
            default="demo",
        ),
    "demo":
        HelpData("Encrypt, decrypt and sign a message with a fresh key pair."),
    "keygen":
        HelpData("Generate a key pair and show its public half."),
    "bits":
        HelpData(
            description="Bit length of each prime.",
            format=int,
            default=2048,
            minimum=keygen.MINIMUM_PRIME_SIZE,
        ),
    "certainty":
        HelpData(
            description="Primality certainty; composites slip through with probability at most 2**-certainty.",
            format=int,
            advanced=True,
            default=keygen.DEFAULT_CERTAINTY,
        ),
    "message":
        HelpData(
            description="Message to encrypt. Must encode to a number less than and coprime to N.",
            format=str,
        ),
    "encoding":
        HelpData(description="Message encoding.", choices=["utf-8", "utf-16", "ascii"], advanced=True, default="utf-8"),
}

needs = {
    "demo": ("bits", "certainty", "encoding"),
    "keygen": ("bits", "certainty"),
}

keyopts = argparse.ArgumentParser(add_help=False)
keyopts.add_argument("--bits", "-b", type=help_dict["bits"].format, help=help_dict["bits"].description)
keyopts.add_argument("--certainty",
                     "-c",
                     type=help_dict["certainty"].format,
                     help=help_dict["certainty"].description)
seeding = keyopts.add_mutually_exclusive_group()
seeding.add_argument("--seed", "-s", type=bytes.fromhex, help="Hex seed for the random source. Warning! Reproducible.")
seeding.add_argument("--time-seed", "-t", action="store_true", help="Seed the random source from the clock.")
corep = argparse.ArgumentParser(prog="textbookrsa")
corep.add_argument("--version", "-V", action="version", version=f"%(prog)s {textbookrsa.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
corep.add_argument("--verbose", "-v", action="store_true", help="Log key generation progress")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

demo = commands.add_parser("demo", parents=[keyopts], help=help_dict["demo"].description)
demo.add_argument("--message", "-m", type=help_dict["message"].format, help=help_dict["message"].description)
demo.add_argument("--encoding", "-e", choices=help_dict["encoding"].choices, help=help_dict["encoding"].description)
keygen_cmd = commands.add_parser("keygen", parents=[keyopts], help=help_dict["keygen"].description)


def checkmodes(arg: str, mode: tuple[bool, bool]):
    helper_data = help_dict[arg]
    if (mode[0] or (helper_data.advanced and not mode[1])) and helper_data.default is not None:
        return helper_data.default
    if mode[0]:
        raise IOError(f"Argument {arg} is missing and non-interactive mode is active.")
    return helper_data


def choice_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    vald = set(helper_data.choices)
    for choice in helper_data.choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if help_dict.get(choice, None):
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(f"{choice}" + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if ch in vald:
            return ch
        if not ch and helper_data.default is not None:
            return helper_data.default
        prntr("Please select an option from the list.")


def input_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    if helper_data.default is not None:
        prntr(f"Default value: {helper_data.default}")
        prntr("To accept default just click enter. Otherwise specify value.")
    cls = helper_data.format
    while True:
        ch = input(f"{arg}: ")
        if not ch and helper_data.default is not None:
            return helper_data.default
        if ch == "":
            prntr("Please provide a value.")
            continue
        try:
            value = cls(ch)
        except ValueError:
            prntr(f"We could not convert your value to {cls.__name__}.")
            continue
        if helper_data.minimum is not None and value < helper_data.minimum:
            prntr(f"The {arg} must be at least {helper_data.minimum}.")
            continue
        return value


def message_handler(key: textbookrsa.RSAPrivKey,
                    given: str | None,
                    encoding: str,
                    mode: tuple[bool, bool],
                    prntr: typing.Callable = print) -> int:
    """Asks until the message encodes to a number less than and coprime to N.

    Raises:
        IOError: If in non-interactive mode the message is missing or unusable.
    """
    while True:
        if given is None:
            if mode[0]:
                raise IOError("Argument message is missing and non-interactive mode is active.")
            given = input("Enter a message (m less than and coprime to N): ")
        m = codec.encode(given, encoding)
        prntr(f"\nencoded:\n{m}\n")
        if not key.needs_retry(m):
            return m
        if mode[0]:
            raise IOError("Message must encode to a number less than and coprime to N.")
        prntr("That message cannot be used with this key, please try another.")
        given = None


def build_key(args: argparse.Namespace, prntr: typing.Callable = print) -> textbookrsa.RSAPrivKey:
    seed = entropy.time_seed() if args.time_seed else args.seed
    prntr("Initializing encryptor...")
    start = time.perf_counter()
    key = textbookrsa.RSAPrivKey(int(args.bits), int(args.certainty), seed)
    result = time.perf_counter() - start
    prntr(f"done! That took {result:.3f} seconds.")
    return key


def run_demo(key: textbookrsa.RSAPrivKey, message: int, encoding: str) -> bool:
    """Round-trips `message` and prints the checks. Returns whether both checks passed."""
    ciphertext = key.encrypt(message)
    plaintext = key.decrypt(ciphertext)
    print(f"ciphertext (m -> c):\n{len(codec.decode(ciphertext))}\n")
    print(f"plaintext (c -> m):\n{len(codec.decode(plaintext))}\n")
    print(f"Enciphered:\n{codec.decode(ciphertext).decode(encoding, errors='replace')}\n")
    print(f"Deciphered:\n{codec.decode(plaintext).decode(encoding, errors='replace')}\n")
    roundtrip = plaintext == message
    print("Plaintext == Original message..." + ("TRUE!" if roundtrip else "Oops..."))
    signed = key.sign(codec.decode(plaintext), key.public_exponent_bytes(), key.modulus_bytes())
    crosscheck = codec.encode(signed) == ciphertext
    print("Ciphertext == Signed with (e, N)..." + ("TRUE!" if crosscheck else "Oops..."))
    return roundtrip and crosscheck


def main(argv: list[str] | None = None):
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args(argv)
    pstatus = (args.non_interactive, args.advanced)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    pspr("Welcome to Textbook RSA!\n")
    if not args.subcommand:
        args.subcommand = choice_handler("subcommand", pstatus, pspr)
        # Subparser defaults never ran.
        args.seed, args.time_seed, args.message = None, False, None
    for reqs in needs[args.subcommand]:
        if getattr(args, reqs, None) is None:
            if help_dict[reqs].choices is not None:
                res = choice_handler(reqs, pstatus, pspr)
            else:
                res = input_handler(reqs, pstatus, pspr)
            setattr(args, reqs, res)
        else:
            pspr(f"{reqs}: {getattr(args, reqs)}")
    pspr("\nInput Complete! Executing...")
    key = build_key(args, pspr)
    match args.subcommand:
        case "keygen":
            print(key)
        case "demo":
            pspr(str(key))
            message = message_handler(key, args.message, args.encoding, pstatus, pspr)
            if not run_demo(key, message, args.encoding):
                sys.exit(1)
    pspr("Thank you for using Textbook RSA!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
